from knowledge_bank.utils.filenames import (
    build_storage_path,
    file_extension,
    sanitize_filename,
    strip_extension,
)


def test_sanitize_strips_accents_and_lowercases():
    assert sanitize_filename("Informe Año 2024.PDF") == "informe-ano-2024.pdf"


def test_sanitize_collapses_and_trims_hyphens():
    assert sanitize_filename("  ¿Qué es esto?  --  v2.md") == "que-es-esto-v2.md"
    assert sanitize_filename("---a---b---") == "a-b"


def test_sanitize_keeps_allowed_characters():
    assert sanitize_filename("my_file-1.2.txt") == "my_file-1.2.txt"


def test_storage_path_uses_owner_folder_and_timestamp():
    assert build_storage_path("user-1", "Report.pdf", 1700000000000) == "user-1/1700000000000-report.pdf"


def test_storage_path_falls_back_to_document():
    assert build_storage_path("user-1", "???", 42) == "user-1/42-document"
    assert build_storage_path("user-1", "日本語", 42) == "user-1/42-document"


def test_storage_path_defaults_to_current_time():
    path = build_storage_path("u", "a.txt")
    prefix, _, name = path.partition("/")[2].partition("-")
    assert prefix.isdigit()
    assert name == "a.txt"


def test_strip_extension_removes_last_extension_only():
    assert strip_extension("song.final.mp3") == "song.final"
    assert strip_extension("clip.mp4") == "clip"
    assert strip_extension("README") == "README"


def test_file_extension_is_lowercased():
    assert file_extension("Clip.MP4") == ".mp4"
    assert file_extension("archive.tar.gz") == ".gz"
    assert file_extension("noext") == ""
