import os
import sys
import unittest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from cmscore.errors import UnknownComponent
from cmscore.intl import resolve_intl
from cmscore.registry import DEFAULT_LAYOUTS, merge_registry


class TestRegistry(unittest.TestCase):
    def test_caller_entries_override_defaults(self) -> None:
        custom = object()
        registry = merge_registry("layout", DEFAULT_LAYOUTS, {"tabs": custom, "grid": "grid-impl"})
        self.assertIs(registry.resolve("tabs"), custom)
        self.assertEqual(registry.resolve("grid"), "grid-impl")
        self.assertEqual(registry.resolve("block"), DEFAULT_LAYOUTS["block"])

    def test_unknown_tag(self) -> None:
        registry = merge_registry("toolbar", None, None)
        with self.assertRaises(UnknownComponent) as ctx:
            registry.resolve("pagination")
        self.assertEqual(ctx.exception.kind, "toolbar")

    def test_registry_is_read_only(self) -> None:
        registry = merge_registry("hoc", {"a": 1}, None)
        with self.assertRaises(TypeError):
            registry["b"] = 2  # type: ignore[index]


class TestResolveIntl(unittest.TestCase):
    def test_defaults(self) -> None:
        intl = resolve_intl(None)
        self.assertEqual(intl.locale, "en")
        self.assertEqual(intl.default_locale, "en")
        self.assertEqual(intl.messages, {})

    def test_default_locale_follows_locale(self) -> None:
        intl = resolve_intl({"locale": "zh"})
        self.assertEqual(intl.default_locale, "zh")

    def test_message_layering(self) -> None:
        plugins = {"zh": {"a": "plugin", "b": "plugin"}}
        hocs = {"en": {"b": "hoc", "c": "hoc"}}
        intl = resolve_intl({"locale": "zh", "messages": {"c": "caller"}}, plugins, hocs)
        self.assertEqual(intl.messages, {"a": "plugin", "b": "hoc", "c": "caller"})


if __name__ == "__main__":
    unittest.main()
