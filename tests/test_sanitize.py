import unittest

from nei_mcp.engine.core.sanitize import clean, is_empty


def _leaves(value):
    if isinstance(value, dict):
        for item in value.values():
            yield from _leaves(item)
    elif isinstance(value, list):
        for item in value:
            yield from _leaves(item)
    else:
        yield value


class TestClean(unittest.TestCase):
    def test_keeps_zero_and_false(self) -> None:
        self.assertEqual(clean({"a": 0, "b": False, "c": "", "d": None}), {"a": 0, "b": False})

    def test_nested_mappings_and_sequences(self) -> None:
        value = {
            "user": {"name": "张三", "email": "", "tags": ["a", None, "", "b", 0]},
            "items": [{"id": 1, "note": None}, None, "", {"id": 2}],
        }
        self.assertEqual(
            clean(value),
            {
                "user": {"name": "张三", "tags": ["a", "b", 0]},
                "items": [{"id": 1}, {"id": 2}],
            },
        )

    def test_empty_containers_are_kept(self) -> None:
        self.assertEqual(clean({"params": [], "meta": {"x": None}}), {"params": [], "meta": {}})

    def test_no_empty_leaves_remain(self) -> None:
        value = {"a": [None, {"b": "", "c": [None, "", {"d": None}]}], "e": " "}
        for leaf in _leaves(clean(value)):
            self.assertFalse(is_empty(leaf))

    def test_idempotent(self) -> None:
        value = {"a": [None, {"b": "", "c": [0, False, "x"]}], "d": None, "e": {"f": ""}}
        once = clean(value)
        self.assertEqual(clean(once), once)

    def test_input_not_modified(self) -> None:
        value = {"a": None, "b": [None, 1]}
        clean(value)
        self.assertEqual(value, {"a": None, "b": [None, 1]})

    def test_scalars_pass_through(self) -> None:
        self.assertEqual(clean(0), 0)
        self.assertIsNone(clean(None))
        self.assertEqual(clean("x"), "x")

    def test_tuples_become_lists(self) -> None:
        self.assertEqual(clean(("a", None, "")), ["a"])


if __name__ == "__main__":
    unittest.main()
