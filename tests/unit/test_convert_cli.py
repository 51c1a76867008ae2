"""Batch conversion script tests."""

import json

import convert


def write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


NATIVE = {"version": "1.0", "template": {"elements": [
    {"type": "text", "position": {"x": 0, "y": 0}, "size": {"width": 150, "height": 80}},
    {"type": "title", "position": {"x": 0, "y": 100}, "size": {"width": 150, "height": 50}},
]}}


class TestConvertCli:

    def test_native_file_is_converted(self, tmp_path, capsys):
        source = write(tmp_path / "layout.json", NATIVE)
        out_dir = tmp_path / "out"
        assert convert.main([str(source), "--output-dir", str(out_dir), "--show-relations"]) == 0

        result = json.loads((out_dir / "layout_template.json").read_text(encoding="utf-8"))
        assert result["element_count"] == 2
        assert result["instances"][1]["relative_position_2"]["above"] == 0
        assert "title" in capsys.readouterr().out

    def test_bad_files_are_reported_and_skipped(self, tmp_path):
        good = write(tmp_path / "good.json", NATIVE)
        bad = tmp_path / "bad.json"
        bad.write_text("{oops", encoding="utf-8")
        empty = write(tmp_path / "empty.json", {"version": "1.0", "template": {"elements": []}})
        missing = tmp_path / "missing.json"
        out_dir = tmp_path / "out"

        assert convert.main([str(good), str(bad), str(empty), str(missing), "--output-dir", str(out_dir)]) == 1
        assert (out_dir / "good_template.json").exists()
        assert not (out_dir / "bad_template.json").exists()

    def test_missing_config_fails_early(self, tmp_path):
        source = write(tmp_path / "layout.json", NATIVE)
        assert convert.main([str(source), "--config", str(tmp_path / "nope.yaml")]) == 2
