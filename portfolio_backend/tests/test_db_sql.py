import unittest

from portfolio_backend.db import RecordTable, SqlRecordStore
from portfolio_backend.errors import NoUpdatesProvided
from portfolio_backend.updates import build_partial_update


class SqlRecordStoreTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL store logic.
    """

    def setUp(self):
        self.db = SqlRecordStore("sqlite+pysqlite:///:memory:")

    def test_create_and_get_record(self):
        record = self.db.create_record(
            RecordTable.WORKCARDS,
            {"size": "L", "text": "hello", "textPara": ["a", "b"]},
        )
        self.assertIsInstance(record.id, int)
        self.assertEqual(record.text_para, ["a", "b"])

        fetched = self.db.get_record(RecordTable.WORKCARDS, record.id)
        self.assertEqual(fetched, record)

    def test_defaults_for_unsupplied_fields(self):
        record = self.db.create_record(RecordTable.COMPETITION, {})
        self.assertIsNone(record.img)
        self.assertIsNone(record.pdf_url)
        self.assertEqual(record.text_para, [])

    def test_tables_are_independent(self):
        self.db.create_record(RecordTable.WORKCARDS, {"text": "w"})
        self.db.create_record(RecordTable.PITCHES, {"text": "p"})

        pitches = self.db.list_records(RecordTable.PITCHES)
        self.assertEqual([r.text for r in pitches], ["p"])

    def test_list_records_ordered_by_id(self):
        first = self.db.create_record(RecordTable.PITCHES, {"text": "1"})
        second = self.db.create_record(RecordTable.PITCHES, {"text": "2"})
        ids = [r.id for r in self.db.list_records(RecordTable.PITCHES)]
        self.assertEqual(ids, [first.id, second.id])

    def test_update_touches_only_patched_columns(self):
        record = self.db.create_record(
            RecordTable.WORKCARDS, {"size": "S", "text": "old", "textPara": ["x"]}
        )
        patch = build_partial_update({"text": "new", "detailsRoute": "/details"})

        updated = self.db.update_record(RecordTable.WORKCARDS, record.id, patch)
        self.assertEqual(updated.text, "new")
        self.assertEqual(updated.details_route, "/details")
        self.assertEqual(updated.size, "S")
        self.assertEqual(updated.text_para, ["x"])

    def test_update_missing_record_returns_none(self):
        patch = build_partial_update({"text": "new"})
        self.assertIsNone(self.db.update_record(RecordTable.WORKCARDS, 12345, patch))

    def test_empty_patch_is_refused(self):
        record = self.db.create_record(RecordTable.WORKCARDS, {"text": "old"})
        with self.assertRaises(NoUpdatesProvided):
            self.db.update_record(
                RecordTable.WORKCARDS, record.id, build_partial_update({})
            )

    def test_delete_record(self):
        record = self.db.create_record(RecordTable.WORKCARDS, {"text": "bye"})
        self.assertTrue(self.db.delete_record(RecordTable.WORKCARDS, record.id))
        self.assertIsNone(self.db.get_record(RecordTable.WORKCARDS, record.id))
        self.assertFalse(self.db.delete_record(RecordTable.WORKCARDS, record.id))


if __name__ == "__main__":
    unittest.main()
