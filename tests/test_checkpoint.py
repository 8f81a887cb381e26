from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from harvester.scraping.checkpoint import CheckpointStore
from harvester.scraping.storage import FileBlobStore, InMemoryBlobStore


class TestCheckpointStore(unittest.TestCase):
    def setUp(self) -> None:
        self.blobs = InMemoryBlobStore()
        self.store = CheckpointStore(store=self.blobs, key="checkpoint.json")

    def test_missing_checkpoint_reads_as_zero(self) -> None:
        checkpoint = self.store.load()
        self.assertEqual(checkpoint.last_page_done, 0)
        self.assertFalse(checkpoint.in_progress)

    def test_save_then_load(self) -> None:
        self.store.save(7)
        self.assertEqual(self.store.load().last_page_done, 7)
        self.assertIn('"lastPageDone": 7', self.blobs.blobs["checkpoint.json"])

    def test_reset_clears_progress(self) -> None:
        self.store.save(3)
        self.store.reset()
        self.assertEqual(self.store.load().last_page_done, 0)

    def test_corrupt_payloads_read_as_zero(self) -> None:
        for raw in ("{not json", "[]", '{"lastPageDone": "abc"}', '{"lastPageDone": null}', "NaN"):
            with self.subTest(raw=raw):
                self.blobs.write_text("checkpoint.json", raw)
                self.assertEqual(self.store.load().last_page_done, 0)

    def test_negative_value_is_clamped(self) -> None:
        self.blobs.write_text("checkpoint.json", '{"lastPageDone": -4}')
        self.assertEqual(self.store.load().last_page_done, 0)

    def test_missing_field_reads_as_zero(self) -> None:
        self.blobs.write_text("checkpoint.json", "{}")
        self.assertEqual(self.store.load().last_page_done, 0)

    def test_overflowing_number_reads_as_zero(self) -> None:
        self.blobs.write_text("checkpoint.json", '{"lastPageDone": 1e400}')
        self.assertEqual(self.store.load().last_page_done, 0)

    def test_undecodable_file_reads_as_zero(self) -> None:
        with tempfile.TemporaryDirectory() as root:
            Path(root, "checkpoint.json").write_bytes(b'{"lastPageDone": \xff\xfe}')
            store = CheckpointStore(store=FileBlobStore(root=root))

            self.assertEqual(store.load().last_page_done, 0)

    def test_rejects_negative_save(self) -> None:
        with self.assertRaises(ValueError):
            self.store.save(-1)


if __name__ == "__main__":
    unittest.main()
