from CantoDictYomitan.util.yomitan_dict.structured_content import (
    EmptyNode,
    Node,
    element,
    structured_content,
)


def test_empty_node_serializes_as_bare_span():
    node = EmptyNode()
    assert node.is_empty is True
    assert node.to_dict() == {"tag": "span"}


def test_container_with_no_children_is_not_empty():
    node = element("div", [], data={"cantodict": "compounds"})
    assert node.is_empty is False
    assert node.to_dict() == {"tag": "div", "content": [], "data": {"cantodict": "compounds"}}


def test_nested_nodes_serialize_recursively():
    node = element("ul", [element("li", "one"), EmptyNode()], style={"listStyleType": "circle"}, lang="zh-HK")
    assert isinstance(node.content, tuple)
    assert node.to_dict() == {
        "tag": "ul",
        "content": [{"tag": "li", "content": "one"}, {"tag": "span"}],
        "style": {"listStyleType": "circle"},
        "lang": "zh-HK",
    }


def test_link_keeps_href():
    node = Node(tag="a", content="例子", href="?query=例子&wildcards=off")
    assert node.to_dict()["href"] == "?query=例子&wildcards=off"


def test_structured_content_wrapper():
    document = structured_content([element("span", "x")])
    assert document == {"type": "structured-content", "content": [{"tag": "span", "content": "x"}]}
