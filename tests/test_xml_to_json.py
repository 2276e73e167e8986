from dataclasses import FrozenInstanceError

import pytest

import xml_json_etl.etl.transform.xml_to_json as xml_to_json_module
from xml_json_etl.etl.extract.markup import Element, Other, Text
from xml_json_etl.etl.transform import (
    ConvertConfig,
    ListDetection,
    aggregate_children,
    convert_node,
    is_ignored,
    xml_file_to_json,
)
from xml_json_etl.etl.transform.xml_to_json import xml_to_json

ALL_STRATEGIES = [ListDetection.NONE, ListDetection.STEM, ListDetection.SUFFIX]

TS_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<tsResponse xmlns="http://tableau.com/api"
            xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
            xsi:schemaLocation="http://tableau.com/api https://help.tableau.com/samples/en-us/rest_api/ts-api_3_4.xsd">
  <pagination pageNumber="1" pageSize="100" totalAvailable="1"/>
  <workbooks>
    <workbook id="wb-1" name="Sales">
      <project id="p-1" name="Default"/>
      <tags/>
    </workbook>
  </workbooks>
</tsResponse>
"""


def cfg(strategy=ListDetection.NONE, ignore=()):
    return ConvertConfig.build(ignore_attributes=ignore, list_detection=strategy)


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_leaf_collapse(strategy):
    assert xml_to_json("<name>hello</name>", cfg(strategy)) == {"name": "hello"}


def test_leaf_collapse_uses_first_text_and_drops_everything_else():
    assert xml_to_json("<p>first<b>bold</b>second</p>", cfg()) == {"p": "first"}
    assert xml_to_json("<p><b>bold</b>tail</p>", cfg()) == {"p": "tail"}


def test_attribute_and_child_merge():
    assert xml_to_json('<root a="1"><b>x</b></root>', cfg()) == {
        "root": {"a": "1", "b": "x"}
    }


def test_text_next_to_attributes_uses_value_key():
    assert xml_to_json('<a id="1">hello</a>', cfg()) == {
        "a": {"id": "1", "value": "hello"}
    }


def test_multiple_text_runs_become_list():
    out = xml_to_json('<a id="1">x<b/>y</a>', cfg())
    assert out == {"a": {"id": "1", "value": ["x", "y"], "b": {}}}
    assert list(out["a"]) == ["id", "value", "b"]


def test_child_overwrites_attribute_with_same_name():
    assert xml_to_json('<a b="attr"><b>child</b></a>', cfg()) == {"a": {"b": "child"}}


def test_ignored_attribute_never_appears():
    data = (
        '<root xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" '
        'xsi:schemaLocation="x y" id="7"/>'
    )
    out = xml_to_json(data, cfg(ignore=["schemaLocation"]))
    assert out == {"root": {"id": "7"}}


def test_ignored_attribute_still_blocks_leaf_collapse():
    data = '<a xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xsi:schemaLocation="s">t</a>'
    assert xml_to_json(data, cfg(ignore=["schemaLocation"])) == {"a": {"value": "t"}}


def test_attribute_filter_is_order_independent():
    data = '<a x="1" y="2" z="3" keep="4"/>'
    first = xml_to_json(data, cfg(ignore=["x", "y", "z"]))
    second = xml_to_json(data, cfg(ignore=["z", "x", "y"]))
    assert first == second == {"a": {"keep": "4"}}


def test_is_ignored():
    config = cfg(ignore=["schemaLocation"])
    assert is_ignored("schemaLocation", config)
    assert not is_ignored("id", config)


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_multiplicity_forces_list(strategy):
    assert xml_to_json("<items><item/><item/></items>", cfg(strategy)) == {
        "items": {"item": [{}, {}]}
    }


def test_singular_child_wrapped_with_suffix_strip():
    data = "<groups><group/></groups>"
    assert xml_to_json(data, cfg(ListDetection.SUFFIX)) == {"groups": {"group": [{}]}}
    assert xml_to_json(data, cfg(ListDetection.NONE)) == {"groups": {"group": {}}}


def test_heuristic_non_match_is_not_wrapped():
    assert xml_to_json("<config><item/></config>", cfg(ListDetection.SUFFIX)) == {
        "config": {"item": {}}
    }


def test_irregular_plural_only_with_stemming():
    data = "<categories><category>x</category></categories>"
    assert xml_to_json(data, cfg(ListDetection.STEM)) == {
        "categories": {"category": ["x"]}
    }
    assert xml_to_json(data, cfg(ListDetection.SUFFIX)) == {
        "categories": {"category": "x"}
    }


def test_detected_list_keeps_growing_flat():
    data = "<groups><group>a</group><group>b</group><group>c</group></groups>"
    for strategy in ALL_STRATEGIES:
        assert xml_to_json(data, cfg(strategy)) == {"groups": {"group": ["a", "b", "c"]}}


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_root_wrapping(strategy):
    assert xml_to_json("<doc/>", cfg(strategy)) == {"doc": {}}


def test_comments_and_processing_instructions_dropped():
    assert xml_to_json("<a><!-- c --><?pi x?><b>x</b></a>", cfg()) == {"a": {"b": "x"}}


def test_keys_follow_first_occurrence():
    out = xml_to_json("<a><z>1</z><y>2</y><z>3</z><x>4</x></a>", cfg())
    assert list(out["a"]) == ["z", "y", "x"]
    assert out["a"]["z"] == ["1", "3"]


def test_convert_node_kinds():
    config = cfg()
    assert convert_node(Text("t"), config) == ("value", "t")
    assert convert_node(Other("comment", "c"), config) is None
    assert convert_node(Element("e", (("k", "v"),), ()), config) == ("e", {"k": "v"})


def test_aggregate_children_does_not_mutate_input():
    children = (Element("item", (), (Text("1"),)), Element("item", (), (Text("2"),)))
    before = tuple(children)
    merged = aggregate_children("items", children, cfg(ListDetection.STEM))
    assert merged == {"item": ["1", "2"]}
    assert children == before


def test_aggregate_children_rejects_foreign_stored_value(monkeypatch):
    # A converter returning a non-string/object value is a defect, not data.
    children = [Element("n", (("a", "1"),)), Element("n", (("a", "2"),))]
    calls = iter([("n", None), ("n", {"a": "2"})])
    monkeypatch.setattr(xml_to_json_module, "convert_node", lambda node, config: next(calls))
    with pytest.raises(AssertionError):
        aggregate_children("root", children, cfg())


def test_tableau_response_with_stemming():
    out = xml_to_json(TS_RESPONSE, cfg(ListDetection.STEM, ignore=["schemaLocation"]))
    assert out == {
        "tsResponse": {
            "pagination": {"pageNumber": "1", "pageSize": "100", "totalAvailable": "1"},
            "workbooks": {
                "workbook": [
                    {
                        "id": "wb-1",
                        "name": "Sales",
                        "project": {"id": "p-1", "name": "Default"},
                        "tags": {},
                    }
                ]
            },
        }
    }


def test_default_config_drops_schema_location_and_stems():
    config = ConvertConfig()
    assert config.list_detection is ListDetection.STEM
    assert "schemaLocation" in config.ignored_attribute_names
    out = xml_to_json(TS_RESPONSE)
    assert "schemaLocation" not in out["tsResponse"]
    assert isinstance(out["tsResponse"]["workbooks"]["workbook"], list)


def test_config_is_immutable():
    config = cfg(ListDetection.SUFFIX, ignore=["a"])
    with pytest.raises(FrozenInstanceError):
        config.list_detection = ListDetection.NONE
    assert config.ignored_attribute_names == frozenset({"a"})


def test_xml_file_to_json(tmp_path):
    p = tmp_path / "users.xml"
    p.write_text("<users><user name='ann'/></users>", encoding="utf-8")
    assert xml_file_to_json(p, cfg(ListDetection.SUFFIX)) == {
        "users": {"user": [{"name": "ann"}]}
    }


def test_convert_document_requires_a_root_property(monkeypatch):
    monkeypatch.setattr(xml_to_json_module, "convert_node", lambda node, config: None)
    with pytest.raises(AssertionError):
        xml_to_json_module.convert_document(Element("doc"), cfg())
