"""
multilist — Hello World

Nested lists on a flat list store. Every list is its own store key;
a slot holding a sublist stores a reference token instead of content.
"""

from multilist import ListContext, NestedList, configure_store, get_list
from multilist.stores import InMemoryListStore


def main():
    # ──────────────────────────────────────
    #  1. Configure a store
    # ──────────────────────────────────────
    store = InMemoryListStore()
    configure_store(store)

    # ──────────────────────────────────────
    #  2. Build a nested list
    # ──────────────────────────────────────
    print("=== Building ===\n")

    todo = get_list("todo")
    todo.push("write docs")
    todo.push(["review", "merge"])
    todo.push("release")

    print(f"  Flat view:   {todo.to_flat_array()}")
    print(f"  Raw slots:   {store.range('redismultilist:todo', 0, -1)}")

    # ──────────────────────────────────────
    #  3. Sparse writes pad with ""
    # ──────────────────────────────────────
    print("\n=== Sparse write ===\n")

    sparse = get_list("sparse")
    sparse[0] = "a"
    sparse[4] = "b"
    print(f"  {sparse.all()}")

    # ──────────────────────────────────────
    #  4. Removing a sublist reference keeps the sublist
    # ──────────────────────────────────────
    print("\n=== Shallow removal ===\n")

    sub = todo[1]
    del todo[1]
    print(f"  todo:    {todo.to_flat_array()}")
    print(f"  sublist: {sub.to_flat_array()}")

    # ──────────────────────────────────────
    #  5. Independent contexts
    # ──────────────────────────────────────
    print("\n=== Explicit context ===\n")

    tenant = ListContext(store=store, namespace="tenant-a")
    inbox = NestedList("inbox", context=tenant)
    inbox.append_many(["hello", ["nested", "world"]])
    print(f"  {inbox.qualified_key} -> {inbox.to_flat_array()}")
    print(f"  same key, default namespace -> {get_list('inbox').to_flat_array()}")


if __name__ == "__main__":
    main()
