"""
Тесты модели узлов: render/set/append и set_super.
"""

from tplchain.nodes import BlockNode, Node, NodeKind, SuperNode, TextNode, format_node_tree
from tplchain.unit import TemplateUnit


def test_text_node_renders_its_content():
    assert TextNode("abc").render() == "abc"
    assert TextNode("").render() == ""


def test_node_without_content_or_children_renders_empty():
    assert Node(NodeKind.UNIT).render() == ""
    assert SuperNode().render() == ""


def test_children_are_concatenated_in_order():
    block = BlockNode("b")
    block.append(TextNode("1"))
    block.append(TextNode("2"))
    block.append(TextNode("3"))
    assert block.render() == "123"


def test_set_short_circuits_children():
    block = BlockNode("b")
    block.append(TextNode("child"))
    block.set("override")
    assert block.render() == "override"


def test_empty_string_content_still_short_circuits():
    block = BlockNode("b")
    block.append(TextNode("child"))
    block.set("")
    assert block.render() == ""


def test_set_super_fills_direct_super_children_only():
    outer = BlockNode("outer")
    inner = BlockNode("inner")
    outer_super = SuperNode()
    inner_super = SuperNode()

    outer.append(TextNode("["))
    outer.append(outer_super)
    outer.append(inner)
    inner.append(inner_super)
    outer.append(TextNode("]"))

    outer.set_super("X")

    assert outer_super.render() == "X"
    assert inner_super.content is None
    assert outer.render() == "[X]"
    assert outer.super_nodes() == [outer_super]


def test_set_super_fills_every_direct_placeholder():
    block = BlockNode("b")
    block.append(SuperNode())
    block.append(TextNode("-"))
    block.append(SuperNode())
    block.set_super("p")
    assert block.render() == "p-p"


def test_kinds_are_tagged():
    assert TextNode("x").kind is NodeKind.TEXT
    assert SuperNode().kind is NodeKind.SUPER
    assert BlockNode("b").kind is NodeKind.BLOCK
    assert TemplateUnit("t").kind is NodeKind.UNIT


def test_format_node_tree():
    unit = TemplateUnit("page")
    block = BlockNode("title")
    block.append(TextNode("Hi"))
    block.append(SuperNode())
    unit.append(block)

    tree = format_node_tree(unit)
    assert tree.splitlines() == [
        "Unit('page')",
        "  Block('title')",
        "    Text('Hi')",
        "    Super(unset)",
    ]
