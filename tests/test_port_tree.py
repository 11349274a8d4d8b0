"""Tests for usbinfo/port_tree.py"""

from usbinfo.port_tree import PortTree


def _tree(*entries):
    tree: PortTree[str] = PortTree()
    for ports, value in entries:
        tree.insert(ports, value)
    return tree


class TestInsert:
    """Tests for PortTree.insert."""

    def test_creates_intermediate_nodes(self):
        """Test intermediate nodes exist without values."""
        tree = _tree(([1, 2, 3], "leaf"))
        assert tree.get([1]) is not None
        assert tree.get([1]).value is None
        assert tree.get([1, 2]).value is None
        assert tree.get([1, 2, 3]).value == "leaf"

    def test_empty_ports_sets_root(self):
        """Test inserting an empty chain sets the root value."""
        tree = _tree(([], "root"))
        assert tree.value == "root"

    def test_overwrite_keeps_descendants(self):
        """Test replacing a value leaves children untouched."""
        tree = _tree(([1], "hub"), ([1, 2], "child"))
        tree.insert([1], "new hub")
        assert tree.get([1]).value == "new hub"
        assert tree.get([1, 2]).value == "child"

    def test_insert_below_keeps_ancestor(self):
        """Test inserting a descendant does not disturb the ancestor value."""
        tree = _tree(([1], "hub"))
        tree.insert([1, 4, 2], "deep")
        assert tree.get([1]).value == "hub"
        assert tree.get([1, 4]).value is None


class TestGet:
    """Tests for PortTree.get and lookup."""

    def test_empty_ports_returns_root(self):
        """Test an empty chain returns the node itself."""
        tree = _tree(([1], "a"))
        assert tree.get([]) is tree

    def test_missing_segment_returns_none(self):
        """Test absent paths return None."""
        tree = _tree(([1, 2], "a"))
        assert tree.get([3]) is None
        assert tree.get([1, 3]) is None
        assert tree.get([1, 2, 5]) is None

    def test_lookup_alias(self):
        """Test lookup behaves like get."""
        tree = _tree(([1, 2], "a"))
        assert tree.lookup([1, 2]) is tree.get([1, 2])


class TestDescendants:
    """Tests for PortTree.descendants."""

    def test_includes_self_first(self):
        """Test the node's own value comes first."""
        tree = _tree(([1], "hub"), ([1, 2], "a"), ([1, 3], "b"))
        values = tree.get([1]).descendants()
        assert values[0] == "hub"
        assert sorted(values) == ["a", "b", "hub"]

    def test_skips_valueless_nodes(self):
        """Test intermediate nodes without values contribute nothing."""
        tree = _tree(([1, 2, 3], "deep"), ([4], "other"))
        assert sorted(tree.descendants()) == ["deep", "other"]

    def test_pre_order(self):
        """Test every parent precedes its own descendants."""
        tree = _tree(([1], "1"), ([1, 1], "1.1"), ([1, 1, 1], "1.1.1"), ([2], "2"), ([2, 5], "2.5"))
        values = tree.descendants()
        assert values.index("1") < values.index("1.1") < values.index("1.1.1")
        assert values.index("2") < values.index("2.5")
        assert len(values) == 5

    def test_empty_tree(self):
        """Test an empty tree has no descendants."""
        assert PortTree().descendants() == []

    def test_deep_chain(self):
        """Test a long chain is traversed without recursion limits."""
        tree: PortTree[int] = PortTree()
        ports = [1] * 2000
        tree.insert(ports, 42)
        assert tree.descendants() == [42]


class TestChildren:
    """Tests for child_ports and direct_children."""

    def test_child_ports_sorted(self):
        """Test child ports come back in ascending order."""
        tree = _tree(([10], "a"), ([2], "b"), ([7], "c"), ([1], "d"))
        assert tree.child_ports() == [1, 2, 7, 10]

    def test_child_ports_empty(self):
        """Test a leaf has no child ports."""
        tree = _tree(([1], "a"))
        assert tree.get([1]).child_ports() == []

    def test_direct_children_only_with_values(self):
        """Test direct_children skips value-less children and grandchildren."""
        tree = _tree(([1], "a"), ([2, 1], "b"), ([3], "c"))
        assert sorted(tree.direct_children()) == [(1, "a"), (3, "c")]
