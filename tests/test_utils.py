"""Tests for file utilities."""

import pytest

from tibco_converter.codegen import FileKind, GeneratedFile
from tibco_converter.utils import (
    FileLoaderError,
    find_convertible_files,
    is_process_file,
    is_schema_file,
    read_text,
    write_generated_files,
)


class TestFileTypes:
    def test_process_extensions(self):
        assert is_process_file("Orders.process")
        assert is_process_file("orders.BWP")
        assert not is_process_file("orders.xsd")

    def test_schema_extensions(self):
        assert is_schema_file("schemas/Order.xsd")
        assert not is_schema_file("Order.xml")


class TestReadText:
    def test_reads_utf8(self, write_file):
        path = write_file("a.xsd", "<schema>é</schema>")
        assert read_text(path) == "<schema>é</schema>"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_text(tmp_path / "missing.xsd")

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.xsd"
        path.write_bytes("<a>é</a>".encode("latin-1"))
        with pytest.raises(FileLoaderError):
            read_text(path)


class TestFindConvertibleFiles:
    def test_directory_is_searched_recursively(self, write_file, tmp_path):
        write_file("b/Order.process", "<x/>")
        write_file("a/Order.xsd", "<x/>")
        write_file("notes.txt", "ignored")
        files = find_convertible_files(tmp_path)
        assert [p.relative_to(tmp_path).as_posix() for p in files] == [
            "a/Order.xsd",
            "b/Order.process",
        ]

    def test_single_file_is_returned_as_is(self, write_file):
        path = write_file("notes.txt", "text")
        assert find_convertible_files(path) == [path]

    def test_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_convertible_files(tmp_path / "missing")


class TestWriteGeneratedFiles:
    def test_writes_below_output_dir(self, tmp_path):
        generated = [
            GeneratedFile("com/acme/dto/OrderDTO.java", "class OrderDTO {}\n", FileKind.DTO)
        ]
        written = write_generated_files(generated, tmp_path / "out")
        target = tmp_path / "out" / "com" / "acme" / "dto" / "OrderDTO.java"
        assert written == [target.resolve()]
        assert target.read_text(encoding="utf-8") == "class OrderDTO {}\n"

    def test_refuses_to_escape_output_dir(self, tmp_path):
        generated = [GeneratedFile("../evil.java", "x", FileKind.DTO)]
        with pytest.raises(FileLoaderError):
            write_generated_files(generated, tmp_path / "out")
        assert not (tmp_path / "evil.java").exists()
