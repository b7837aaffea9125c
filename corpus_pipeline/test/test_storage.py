import csv
import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

from corpus_pipeline.errors import FileReadError, ManifestNotFoundError, SourceNotFoundError, WriteError
from corpus_pipeline.storage import (
    derive_output_name,
    ensure_run_dir,
    find_text_files,
    read_manifest,
    read_normalized_text,
    run_timestamp,
    unique_path,
)
from corpus_pipeline.terms import parse_term_groups
from corpus_pipeline.types import FileResult
from corpus_pipeline.writer import write_errors, write_results_csv, write_status


class _TmpDirTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()


class TestFindTextFiles(_TmpDirTestCase):
    def test_single_file(self):
        path = self.tmp / "a.txt"
        path.write_text("x")
        self.assertEqual(find_text_files(path), [path])

    def test_directory_sorted_non_recursive(self):
        for name in ["b.txt", "a.txt", "c.md"]:
            (self.tmp / name).write_text("x")
        (self.tmp / "sub").mkdir()
        (self.tmp / "sub" / "nested.txt").write_text("x")

        files = find_text_files(self.tmp)
        self.assertEqual([p.name for p in files], ["a.txt", "b.txt", "c.md"])

    def test_unlistable_directory(self):
        (self.tmp / "a.txt").write_text("x")
        with patch.object(Path, "iterdir", side_effect=PermissionError("Permission denied")):
            with self.assertLogs("corpus_pipeline.storage", level="ERROR"):
                self.assertEqual(find_text_files(self.tmp), [])

    def test_missing_and_empty(self):
        self.assertEqual(find_text_files(self.tmp / "nope"), [])
        (self.tmp / "empty").mkdir()
        self.assertEqual(find_text_files(self.tmp / "empty"), [])


class TestReadInputs(_TmpDirTestCase):
    def test_read_normalized_text(self):
        path = self.tmp / "a.txt"
        path.write_text("The Cat SAT.", encoding="utf-8")
        self.assertEqual(read_normalized_text(path), "the cat sat.")

    def test_read_errors(self):
        with self.assertRaises(SourceNotFoundError):
            read_normalized_text(self.tmp / "missing.txt")

        bad = self.tmp / "bad.txt"
        bad.write_bytes(b"\xff\xfe\xfa")
        with self.assertRaises(FileReadError):
            read_normalized_text(bad)

    def test_read_manifest(self):
        path = self.tmp / "list.txt"
        path.write_text("/a/one.pdf\n\n  /b/two.pdf  \n\n", encoding="utf-8")
        self.assertEqual(read_manifest(path), ["/a/one.pdf", "/b/two.pdf"])

        with self.assertRaises(ManifestNotFoundError):
            read_manifest(self.tmp / "missing.txt")

    def test_read_manifest_with_bom(self):
        path = self.tmp / "list.txt"
        path.write_bytes(b"\xef\xbb\xbf/a/one.pdf\n")
        self.assertEqual(read_manifest(path), ["/a/one.pdf"])


class TestNaming(_TmpDirTestCase):
    def test_run_timestamp(self):
        self.assertEqual(run_timestamp(datetime(2024, 3, 5, 7, 8, 9)), "20240305_070809")
        self.assertRegex(run_timestamp(), r"^\d{8}_\d{6}$")

    def test_derive_output_name(self):
        test_conditions = [
            {"path": "/data/a/b/c/d/report.pdf", "parts": 5, "expected": "a-b-c-d-report.txt"},
            {"path": "report.PDF", "parts": 5, "expected": "report.txt"},
            {"path": "C:\\docs\\2023\\q1\\file.pdf", "parts": 5, "expected": "C:-docs-2023-q1-file.txt"},
            {"path": "/x/y/z.pdf", "parts": 2, "expected": "y-z.txt"},
            {"path": "/x/notes.pdf.bak", "parts": 5, "expected": "-x-notes.pdf.bak.txt"},
        ]

        for condition in test_conditions:
            with self.subTest(**condition):
                self.assertEqual(derive_output_name(condition["path"], condition["parts"]), condition["expected"])

    def test_unique_path(self):
        candidate = self.tmp / "out.csv"
        self.assertEqual(unique_path(candidate), candidate)
        candidate.write_text("x")
        self.assertEqual(unique_path(candidate), self.tmp / "out_1.csv")
        (self.tmp / "out_1.csv").write_text("x")
        self.assertEqual(unique_path(candidate), self.tmp / "out_2.csv")

    def test_ensure_run_dir_never_reuses(self):
        first = ensure_run_dir(self.tmp, "pdf_extracts", "20240101_000000")
        second = ensure_run_dir(self.tmp, "pdf_extracts", "20240101_000000")
        self.assertEqual(first.name, "pdf_extracts_20240101_000000")
        self.assertNotEqual(first, second)
        self.assertTrue(second.is_dir())

    def test_ensure_run_dir_under_a_file(self):
        occupied = self.tmp / "out"
        occupied.write_text("x")
        with self.assertRaises(WriteError):
            ensure_run_dir(occupied, "pdf_extracts", "20240101_000000")


class TestWriter(_TmpDirTestCase):
    def test_write_results_csv(self):
        groups = parse_term_groups("cat\ndog/hound\n")
        results = [
            FileResult(path="/corpus/b.txt", counts={"cat": 2, "dog/hound": 0}),
            FileResult(path="/corpus/a.txt", counts={"cat": 0, "dog/hound": 5}),
        ]
        out_dir = self.tmp / "data"
        path = write_results_csv(out_dir, results, groups, timestamp="20240101_120000")

        self.assertEqual(path, out_dir / "search_results_20240101_120000.csv")
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        self.assertEqual(
            rows,
            [["Filename", "cat", "dog/hound"], ["b.txt", "2", "0"], ["a.txt", "0", "5"]],
        )

    def test_duplicate_labels_give_duplicate_columns(self):
        groups = parse_term_groups("cat\ncat\n")
        results = [FileResult(path="a.txt", counts={"cat": 1})]
        path = write_results_csv(self.tmp, results, groups, timestamp="t")
        self.assertEqual(path.read_text(encoding="utf-8"), "Filename,cat,cat\na.txt,1,1\n")

    def test_labels_with_commas_are_quoted(self):
        groups = parse_term_groups("a, b/c\n")
        results = [FileResult(path="x.txt", counts={"a, b/c": 3})]
        path = write_results_csv(self.tmp, results, groups, timestamp="t")
        self.assertEqual(path.read_text(encoding="utf-8"), 'Filename,"a, b/c"\nx.txt,3\n')

    def test_existing_csv_not_overwritten(self):
        groups = parse_term_groups("cat")
        results = [FileResult(path="a.txt", counts={"cat": 1})]
        first = write_results_csv(self.tmp, results, groups, timestamp="t")
        second = write_results_csv(self.tmp, results, groups, timestamp="t")
        self.assertNotEqual(first, second)

    def test_output_dir_is_a_file(self):
        occupied = self.tmp / "out"
        occupied.write_text("x")
        groups = parse_term_groups("cat")
        results = [FileResult(path="a.txt", counts={"cat": 1})]
        with self.assertRaises(WriteError) as ctx:
            write_results_csv(occupied, results, groups, timestamp="t")
        self.assertEqual(ctx.exception.path, str(occupied))

    def test_status_and_errors(self):
        write_status(self.tmp, {"total": 1})
        write_errors(self.tmp, {"a.pdf": "boom"})
        self.assertEqual(json.loads((self.tmp / "status.json").read_text(encoding="utf-8")), {"total": 1})
        self.assertEqual(json.loads((self.tmp / "errors.json").read_text(encoding="utf-8")), {"a.pdf": "boom"})


if __name__ == "__main__":
    unittest.main()
