# FILE: squirrito/tools/clear_memories.py
"""
Delete every memory in a store (development helper)

    python -m squirrito.tools.clear_memories --yes
"""
import argparse
import sys

from squirrito.config import get_settings
from squirrito.services.memory_store import MemoryStoreError, get_memory_store


def clear_memories(name=None, confirmed=False):
    """Clear the named store; refuses without confirmation"""
    store = get_memory_store(name)

    if not confirmed:
        print(f"✗ Refusing to clear '{store.name}' at {store.path} without --yes")
        return 1

    try:
        count = str(len(store.list()))
    except MemoryStoreError:
        # unreadable store is still cleared
        count = "unreadable"

    try:
        store.clear()
    except MemoryStoreError as e:
        print(f"✗ {e}")
        return 2

    print(f"✓ Cleared '{store.name}' ({count} memories)")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--name", default=None,
                        help=f"store name (default: {get_settings().memory_store_name})")
    parser.add_argument("--yes", action="store_true", help="really delete everything")
    args = parser.parse_args(argv)
    return clear_memories(name=args.name, confirmed=args.yes)


if __name__ == "__main__":
    sys.exit(main())
