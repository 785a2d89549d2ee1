import unittest

from nei_mcp.engine.core.normalize import normalize
from nei_mcp.engine.core.query import ProjectQuery
from nei_mcp.engine.core.sanitize import clean
from nei_mcp.engine.core.table_fields import (
    FieldCandidate,
    classify,
    derive_table_fields,
    field_title,
    is_enum_type_name,
    list_output,
    merge_fields,
)
from nei_mcp.models import ParameterSpec, ValueType

from sample_resource import PROJECT_KEY, raw_resource


def _fields(uri):
    query = ProjectQuery(normalize(clean(raw_resource()), key=PROJECT_KEY))
    return [field.to_json() for field in derive_table_fields(query, uri)]


class TestDeriveTableFields(unittest.TestCase):
    def test_list_interface_with_enum(self) -> None:
        fields = _fields("/api/user/list")
        self.assertEqual(
            fields,
            [
                {
                    "dataIndex": "status",
                    "valueType": "select",
                    "title": "status",
                    "valueEnum": {"1": "激活", "0": "禁用"},
                },
                {"dataIndex": "id", "valueType": "digit", "title": "id", "hideInSearch": True},
            ],
        )

    def test_ignored_inputs_excluded(self) -> None:
        names = [field["dataIndex"] for field in _fields("/api/user/list")]
        self.assertNotIn("pagesize", names)

    def test_table_candidate_wins_for_shared_fields(self) -> None:
        fields = {field["dataIndex"]: field for field in _fields("/api/order/page")}
        # Search side declares amount as String "金额"; table side as Number, no description
        self.assertEqual(fields["amount"]["valueType"], "digit")
        self.assertEqual(fields["amount"]["title"], "amount")
        self.assertEqual(fields["keyword"]["title"], "搜索词")
        self.assertNotIn("hideInSearch", fields["amount"])
        self.assertNotIn("hideInTable", fields["amount"])

    def test_merge_order_and_preferred_list_output(self) -> None:
        fields = _fields("/api/order/page")
        self.assertEqual([f["dataIndex"] for f in fields], ["keyword", "amount", "orderNo"])
        self.assertTrue(fields[2]["hideInSearch"])
        self.assertEqual(fields[2]["title"], "订单号")

    def test_search_only_fields(self) -> None:
        self.assertEqual(
            _fields("/api/order/create"),
            [{"dataIndex": "amount", "valueType": "digit", "title": "订单金额", "hideInTable": True}],
        )

    def test_no_candidates(self) -> None:
        self.assertEqual(_fields("/api/user/detail"), [])

    def test_unknown_interface(self) -> None:
        self.assertEqual(_fields("/does/not/exist"), [])
        self.assertEqual(_fields(""), [])

    def test_declared_type_not_exposed(self) -> None:
        for field in _fields("/api/user/list"):
            self.assertEqual(
                set(field) - {"dataIndex", "valueType", "title", "hideInSearch", "hideInTable", "valueEnum"},
                set(),
            )

    def test_missing_enum_datatype_stays_text(self) -> None:
        raw = clean(raw_resource())
        raw["datatypes"] = [dt for dt in raw["datatypes"] if dt["name"] != "StatusEnum"]
        query = ProjectQuery(normalize(raw, key=PROJECT_KEY))
        status = derive_table_fields(query, "/api/user/list")[0]
        self.assertEqual(status.value_type, ValueType.TEXT)
        self.assertIsNone(status.value_enum)


class TestClassification(unittest.TestCase):
    def test_base_types(self) -> None:
        self.assertEqual(classify(ParameterSpec(name="a", type_name="Long")).value_type, ValueType.DIGIT)
        self.assertEqual(classify(ParameterSpec(name="a", type_name="boolean")).value_type, ValueType.TEXT)
        self.assertEqual(classify(ParameterSpec(name="a", type_name="GUID")).value_type, ValueType.TEXT)

    def test_unrecognized_type_dropped(self) -> None:
        self.assertIsNone(classify(ParameterSpec(name="a", type_name="Date")))
        self.assertIsNone(classify(ParameterSpec(name="a")))

    def test_enum_type_kept(self) -> None:
        candidate = classify(ParameterSpec(name="a", type_name="ColorEnum"))
        self.assertEqual(candidate.value_type, ValueType.TEXT)
        self.assertEqual(candidate.declared_type, "ColorEnum")

    def test_enum_predicate(self) -> None:
        self.assertTrue(is_enum_type_name("StatusEnum"))
        self.assertFalse(is_enum_type_name("enumeration"))
        self.assertFalse(is_enum_type_name(None))

    def test_title(self) -> None:
        self.assertEqual(field_title(ParameterSpec(name="a", description="短标题")), "短标题")
        self.assertEqual(field_title(ParameterSpec(name="a", description="0123456789")), "a")
        self.assertEqual(field_title(ParameterSpec(name="a")), "a")

    def test_list_output_falls_back_to_first_array(self) -> None:
        outputs = [
            ParameterSpec(name="total", type_name="int"),
            ParameterSpec(name="rows", is_array=True),
            ParameterSpec(name="more", is_array=True),
        ]
        self.assertEqual(list_output(outputs).name, "rows")
        self.assertIsNone(list_output(outputs[:1]))

    def test_merge_fields(self) -> None:
        a = FieldCandidate("a", ValueType.TEXT, "A", None)
        b_search = FieldCandidate("b", ValueType.TEXT, "B search", None)
        b_table = FieldCandidate("b", ValueType.DIGIT, "B table", None)
        c = FieldCandidate("c", ValueType.TEXT, "C", None)
        merged = merge_fields({"a": a, "b": b_search}, {"c": c, "b": b_table})
        self.assertEqual(
            merged,
            [(b_table, {}), (a, {"hide_in_table": True}), (c, {"hide_in_search": True})],
        )


if __name__ == "__main__":
    unittest.main()
