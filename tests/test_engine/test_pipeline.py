"""Tests for the end-to-end build pipeline."""

from __future__ import annotations

import importlib.util

import pytest

from shapeforge.config import Settings
from shapeforge.engine.pipeline import ShapePipeline, create_pipeline, discover_categories
from shapeforge.models.reports import BuildReport
from tests.conftest import CIRCLE_SVG, FLAG_MIXED_SVG, write_assets


def _load(path):
    spec = importlib.util.spec_from_file_location("built_shape_sets", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_create_pipeline(settings):
    pipeline = create_pipeline(settings)
    assert isinstance(pipeline, ShapePipeline)
    assert pipeline.settings is settings


def test_discover_categories_order(tmp_path):
    for name in ["zeta", "nautical", "alpha", "primitives"]:
        (tmp_path / name).mkdir()
    (tmp_path / "loose.svg").write_text("<svg/>")
    order = ["primitives", "blocks33", "nautical"]
    assert discover_categories(tmp_path, order) == ["primitives", "nautical", "alpha", "zeta"]


def test_discover_missing_dir(tmp_path):
    assert discover_categories(tmp_path / "missing") == []


class TestRun:
    def test_report(self, settings):
        report = create_pipeline(settings).run()
        assert isinstance(report, BuildReport)
        assert report.sets == {"primitives": 3, "blocks33": 2, "nautical": 3}
        assert report.total_shapes == 8
        assert [s.path.endswith("broken.svg") for s in report.skipped] == [True]
        assert len(report.normalize) == 1
        assert report.normalize[0].injected == 2
        assert report.normalize[0].skipped == 1
        assert report.output == str(settings.output_path)
        assert settings.output_path.exists()

    def test_generated_module(self, settings):
        create_pipeline(settings).run()
        module = _load(settings.output_path)

        assert list(module.shape_sets) == ["primitives", "blocks33", "nautical"]
        assert module.shape_sets["nautical"]["meta"]["multi_color"] is True
        assert module.shape_sets["primitives"]["meta"]["multi_color"] is False
        assert module.shape_sets["nautical"]["meta"]["name"] == "Nautical Flags"

        # Backgrounds injected by the normalizer paint first
        for name in ["nautical_a_01", "nautical_b_01", "nautical_c_01"]:
            out = module.shapes[name](32, 32, 64)
            assert out[0].slot == 1
            assert all(el.slot != 1 for el in out[1:])

    def test_nautical_order_preserved(self, settings):
        create_pipeline(settings).run()
        module = _load(settings.output_path)
        out = module.shapes["nautical_c_01"](0, 0, 64)
        assert [el.slot for el in out] == [1, 3, 2, 4]

    def test_rerun_is_stable(self, settings):
        create_pipeline(settings).run()
        first = settings.output_path.read_text(encoding="utf-8")
        svgs = {p: p.read_bytes() for p in (settings.assets_dir / "nautical").glob("*.svg")}

        report = create_pipeline(settings).run()
        assert settings.output_path.read_text(encoding="utf-8") == first
        assert {p: p.read_bytes() for p in svgs} == svgs
        assert report.normalize[0].injected == 0

    def test_dry_run_writes_nothing(self, settings):
        before = (settings.assets_dir / "nautical" / "nautical_a_01.svg").read_bytes()
        report = create_pipeline(settings).run(dry_run=True)
        assert report.normalize[0].injected == 2
        assert report.output == ""
        assert not settings.output_path.exists()
        assert (settings.assets_dir / "nautical" / "nautical_a_01.svg").read_bytes() == before

    def test_disabled_set(self, settings):
        meta = dict(settings.set_meta)
        meta["blocks33"] = {**meta["blocks33"], "enabled": False}
        settings = settings.model_copy(update={"set_meta": meta})
        create_pipeline(settings).run()
        module = _load(settings.output_path)
        enabled = module.get_enabled_shapes()
        assert "block33_01" not in enabled
        assert "circle_01" in enabled
        assert "block33_01" in module.get_all_shapes()

    def test_collision_reported(self, tmp_path):
        root = write_assets(
            tmp_path / "assets",
            {"primitives": {"dot": CIRCLE_SVG}, "extra": {"dot": FLAG_MIXED_SVG}},
        )
        settings = Settings(assets_dir=root, output_path=tmp_path / "out.py")
        report = create_pipeline(settings).run()
        assert report.collisions == {"dot": ["primitives", "extra"]}
        module = _load(settings.output_path)
        assert isinstance(module.shapes["dot"](0, 0, 64), list)

    def test_strict_collision_fails(self, tmp_path):
        root = write_assets(
            tmp_path / "assets",
            {"primitives": {"dot": CIRCLE_SVG}, "extra": {"dot": CIRCLE_SVG}},
        )
        settings = Settings(assets_dir=root, output_path=tmp_path / "out.py", strict_collisions=True)
        with pytest.raises(ValueError):
            create_pipeline(settings).run()

    def test_untagged_warning_in_report(self, tmp_path):
        root = write_assets(tmp_path / "assets", {"nautical": {"mixed": FLAG_MIXED_SVG}})
        settings = Settings(assets_dir=root, output_path=tmp_path / "out.py")
        report = create_pipeline(settings).run()
        assert len(report.warnings) == 1
        assert "untagged" in report.warnings[0]

    def test_unwritable_output_is_fatal(self, settings, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not a directory")
        settings = settings.model_copy(update={"output_path": blocker / "shape_sets.py"})
        with pytest.raises(OSError):
            create_pipeline(settings).run()


def test_normalize_only(settings):
    reports = create_pipeline(settings).normalize()
    assert len(reports) == 1
    assert reports[0].injected == 2
    assert not settings.output_path.exists()
