import copy
import os
import sys
import unittest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from cmscore.schema_normalize import normalize_schema


def raw_schema():
    return {
        "users": {"type": "array", "items": {"type": "object", "items": {"name": {"type": "string"}}}},
        "info": {"type": "object", "items": {"title": {"type": "string"}}},
    }


class TestNormalizeSchema(unittest.TestCase):
    def test_array_items_gain_id_field(self) -> None:
        normalized = normalize_schema(raw_schema())
        self.assertEqual(normalized["users"]["items"]["id"], {"type": "id"})
        self.assertEqual(normalized["users"]["items"]["items"], {"name": {"type": "string"}})

    def test_non_array_entities_copied_unchanged(self) -> None:
        schema = raw_schema()
        normalized = normalize_schema(schema)
        self.assertEqual(normalized["info"], schema["info"])
        self.assertIsNot(normalized["info"], schema["info"])
        self.assertNotIn("id", normalized["info"]["items"])

    def test_input_not_mutated(self) -> None:
        schema = raw_schema()
        before = copy.deepcopy(schema)
        normalize_schema(schema)
        self.assertEqual(schema, before)

    def test_existing_id_field_replaced_with_id_type(self) -> None:
        schema = {"tags": {"type": "array", "items": {"type": "string", "id": {"type": "string"}}}}
        normalized = normalize_schema(schema)
        self.assertEqual(normalized["tags"]["items"]["id"], {"type": "id"})
        self.assertEqual(schema["tags"]["items"]["id"], {"type": "string"})

    def test_array_without_items_passes_through(self) -> None:
        normalized = normalize_schema({"bad": {"type": "array", "items": "nope"}})
        self.assertEqual(normalized["bad"]["items"], "nope")


if __name__ == "__main__":
    unittest.main()
