from hypothesis import given, strategies as st

from ordered_tree import OrderedTree


def walk(node):
    stack = [node] if node is not None else []
    while stack:
        node = stack.pop()
        yield node
        stack.extend(child for child in (node.left, node.right) if child is not None)


def subtree_values(node):
    return [n.value for n in walk(node)]


@given(st.lists(st.integers()))
def test_search_order_holds(xs):
    tree = OrderedTree.from_iterable(xs)

    for node in walk(tree._root):
        assert all(v < node.value for v in subtree_values(node.left))
        assert all(v > node.value for v in subtree_values(node.right))


@given(st.lists(st.integers()), st.integers())
def test_duplicates_change_nothing(xs, extra):
    tree = OrderedTree.from_iterable(xs + [extra])
    before = (str(tree), len(tree))

    tree.insert(extra)

    assert (str(tree), len(tree)) == before
    assert len(tree) == len(set(xs) | {extra})


@given(st.lists(st.integers(min_value=-50, max_value=50)))
def test_membership(xs):
    tree = OrderedTree.from_iterable(xs)

    for v in range(-60, 61):
        assert tree.has_element(v) == (v in xs)
        assert (tree.retrieve(v) is not None) == (v in xs)
        assert (tree.retrieve_mut(v) is not None) == (v in xs)


@given(st.lists(st.integers()))
def test_in_order_is_sorted(xs):
    assert list(OrderedTree.from_iterable(xs).into_in_order()) == sorted(set(xs))


@given(st.lists(st.integers()))
def test_every_traversal_is_exhaustive(xs):
    for into in ("into_pre_order", "into_in_order", "into_post_order"):
        out = list(getattr(OrderedTree.from_iterable(xs), into)())
        assert sorted(out) == sorted(set(xs))


@given(st.lists(st.integers(), min_size=1))
def test_pre_order_starts_and_post_order_ends_at_root(xs):
    assert next(OrderedTree.from_iterable(xs).into_pre_order()) == xs[0]
    assert list(OrderedTree.from_iterable(xs).into_post_order())[-1] == xs[0]


@given(st.lists(st.integers()))
def test_pre_order_rebuilds_same_shape(xs):
    tree = OrderedTree.from_iterable(xs)
    shape = str(tree)

    rebuilt = OrderedTree.from_iterable(tree.into_pre_order())

    assert str(rebuilt) == shape
