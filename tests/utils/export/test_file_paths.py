from pathlib import Path

from rbexport.utils.export.file_paths import output_path_for_workspace, safe_slug


def test_default_workspace_uses_base():
    assert output_path_for_workspace("links.csv", None) == "links.csv"
    assert output_path_for_workspace("links.csv", "") == "links.csv"


def test_workspace_suffix_inserted_before_extension():
    assert output_path_for_workspace("links.csv", "W1") == "links-W1.csv"


def test_directory_is_kept():
    result = output_path_for_workspace(str(Path("exports") / "links.csv"), "abc")

    assert Path(result) == Path("exports") / "links-abc.csv"


def test_base_without_extension():
    assert output_path_for_workspace("links", "W1") == "links-W1"


def test_unsafe_characters_replaced():
    assert safe_slug("My Team/2024") == "My-Team-2024"
    assert safe_slug("ok_name-1.0") == "ok_name-1.0"
    assert output_path_for_workspace("links.csv", "a b:c") == "links-a-b-c.csv"
