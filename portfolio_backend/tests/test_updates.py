import unittest

from portfolio_backend.updates import build_partial_update, parse_text_para


class PartialUpdateTests(unittest.TestCase):
    def test_skips_empty_and_absent_fields(self):
        update = build_partial_update(
            {
                "size": "L",
                "text": "",
                "textPara": [],
                "detailsRoute": "home",
                "img": None,
                "pdfUrl": "http://x",
            }
        )
        self.assertEqual(
            update.fragments,
            ["size = $1", "detailsRoute = $2", "pdfUrl = $3"],
        )
        self.assertEqual(update.values, ["L", "home", "http://x"])

    def test_order_follows_declaration_not_input(self):
        update = build_partial_update(
            {"pdfUrl": "p", "img": "i", "textPara": ["a"], "size": "s"}
        )
        self.assertEqual(update.columns, ["size", "textPara", "img", "pdfUrl"])
        self.assertEqual(update.values, ["s", ["a"], "i", "p"])

    def test_all_empty_signals_no_updates(self):
        update = build_partial_update(
            {"size": "", "text": None, "textPara": [], "detailsRoute": ""}
        )
        self.assertTrue(update.is_empty)
        self.assertEqual(update.fragments, [])
        self.assertEqual(update.values, [])

    def test_unknown_fields_are_ignored(self):
        update = build_partial_update({"id": 3, "text": "t"})
        self.assertEqual(update.as_dict(), {"text": "t"})


class ParseTextParaTests(unittest.TestCase):
    def test_parses_json_array(self):
        self.assertEqual(parse_text_para('["a", "b"]'), ["a", "b"])

    def test_malformed_or_non_array_is_empty(self):
        self.assertEqual(parse_text_para("[oops"), [])
        self.assertEqual(parse_text_para('"text"'), [])
        self.assertEqual(parse_text_para(None), [])
        self.assertEqual(parse_text_para(""), [])

    def test_non_string_items_are_stringified(self):
        self.assertEqual(parse_text_para('[1, "two"]'), ["1", "two"])

    def test_nulls_dropped_and_nested_values_kept_as_json(self):
        self.assertEqual(
            parse_text_para('[null, ["x"], "p", true]'), ['["x"]', "p", "true"]
        )


if __name__ == "__main__":
    unittest.main()
