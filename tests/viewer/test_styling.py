# Copyright 2025 Tobias Olenyi.
# SPDX-License-Identifier: Apache-2.0

"""Tests for src/domview/viewer/styling.py"""

import pytest
from pydantic_extra_types.color import Color

from domview.core import AtomSelection, Representation, StructureFormat
from domview.engine import EngineDisposedError
from domview.mapping import ChainClassifier
from domview.style import DOMAIN_COLORS, DisplayOptions
from domview.viewer import DomainStylingController
from domview.viewer.styling import HIGHLIGHT_COLOR


@pytest.fixture
def info(two_chain_atoms):
    return ChainClassifier().classify(two_chain_atoms)


@pytest.fixture
def domains(make_domain):
    return [
        make_domain("d1", 1, 50),  # shifted to 20-69
        make_domain("d2", 80, 120),
        make_domain("far", 1355, 1392),  # does not fit chain A (20-140)
    ]


@pytest.fixture
def controller(recording_engine, info, domains) -> DomainStylingController:
    return DomainStylingController(recording_engine, info, domains)


def test_apply_styles_mappable_domains_and_skips_the_rest(controller, recording_engine):
    report = controller.apply()

    assert report.styled_count == 2
    assert [o.domain_id for o in report.skipped] == ["far"]
    assert str(controller.mapped_selection(0)) == "A:20-69"
    assert controller.mapped_selection(2) is None

    red, blue = Color(DOMAIN_COLORS[0]), Color(DOMAIN_COLORS[1])
    assert recording_engine.style_at("A", 20).color == red
    assert recording_engine.style_at("A", 69).color == red
    assert recording_engine.style_at("A", 100).color == blue

    base = recording_engine.style_at("A", 75)
    assert base.color == Color("gray")
    assert base.opacity == pytest.approx(0.8)
    assert recording_engine.call_names()[-1] == "render"


def test_only_selected_chain_is_visible(controller, recording_engine):
    controller.apply()
    assert not recording_engine.style_at("B", 10, "P").visible
    # Side chains stay hidden unless requested.
    assert not recording_engine.style_at("A", 30, "CB").visible


def test_side_chains_follow_domain_color(recording_engine, info, domains):
    options = DisplayOptions(show_side_chains=True)
    DomainStylingController(recording_engine, info, domains, options=options).apply()
    assert recording_engine.style_at("A", 30, "CB").color == Color(DOMAIN_COLORS[0])


def test_explicit_color_overrides_palette(recording_engine, info, make_domain):
    controller = DomainStylingController(
        recording_engine, info, [make_domain("d1", 30, 40, color="purple")]
    )
    report = controller.apply()
    assert report.styled[0].color == Color("purple").as_hex()
    assert recording_engine.style_at("A", 35).color == Color("purple")


def test_palette_cycles(recording_engine, info, make_domain):
    many = [make_domain(f"d{i}", 20 + i * 5, 24 + i * 5) for i in range(12)]
    controller = DomainStylingController(recording_engine, info, many)
    assert controller.color_for(10) == controller.color_for(0)
    assert controller.color_for(11) == Color(DOMAIN_COLORS[1])


def test_empty_palette_is_rejected(recording_engine, info):
    with pytest.raises(ValueError):
        DomainStylingController(recording_engine, info, palette=[])


def test_labels_and_ligands(engine_cls, make_protein, make_ligand, info, domains):
    atoms = make_protein("A", range(20, 141)) + make_ligand("A", 900) + make_ligand("A", 901, "HOH")
    engine = engine_cls(atoms)
    engine.load_model("", StructureFormat.MMCIF)

    DomainStylingController(
        engine, info, domains, options=DisplayOptions(show_labels=True)
    ).apply()

    assert [text for text, _ in engine.labels] == ["d1", "d2"]
    heme = engine.style_at("A", 900, "FE")
    assert heme.visible and heme.representation == Representation.STICK
    assert not engine.style_at("A", 901, "FE").visible  # water hidden by default


def test_domain_label_prefers_annotation_label(recording_engine, info, make_domain):
    DomainStylingController(
        recording_engine,
        info,
        [make_domain("e2uubA1", 30, 40, label="P-loop")],
        options=DisplayOptions(show_labels=True),
    ).apply()
    assert recording_engine.labels[0][0] == "P-loop"


def test_set_domains_restyles(controller, recording_engine, make_domain):
    controller.apply()
    report = controller.set_domains([make_domain("only", 100, 110)])
    assert report.styled_count == 1
    assert recording_engine.style_at("A", 30).color == Color("gray")
    assert recording_engine.style_at("A", 105).color == Color(DOMAIN_COLORS[0])


def test_reset_frames_selected_chain(controller, recording_engine):
    assert controller.reset()
    zoom_calls = [args for name, args in recording_engine.calls if name == "zoom_to"]
    assert zoom_calls == [(AtomSelection(chain_id="A"), controller.ZOOM_DURATION_MS)]


def test_highlight_domain_dims_chain(controller, recording_engine):
    controller.apply()
    assert controller.highlight_domain(1)

    assert recording_engine.style_at("A", 30).opacity == pytest.approx(0.3)
    highlighted = recording_engine.style_at("A", 100)
    assert highlighted.color == Color(DOMAIN_COLORS[1])
    assert highlighted.opacity == 1.0
    name, (selection, _) = recording_engine.calls[-2]
    assert name == "zoom_to"
    assert selection.residues is not None and 100 in selection.residues


def test_highlight_unmapped_domain_is_refused(controller, recording_engine):
    controller.apply()
    recording_engine.calls.clear()
    assert not controller.highlight_domain(2)
    assert not controller.zoom_to_domain(7)
    assert recording_engine.calls == []


def test_zoom_controls(controller, recording_engine):
    controller.apply()
    assert controller.zoom_in()
    assert controller.zoom_out()
    assert recording_engine.zoom_level == pytest.approx(1.2 * 0.8)
    assert controller.zoom_to_domain(0)


def test_highlight_residue(controller, recording_engine):
    controller.apply()
    assert controller.highlight_residue(42)
    style = recording_engine.style_at("A", 42)
    assert style.color == HIGHLIGHT_COLOR
    assert style.representation == Representation.STICK
    assert [text for text, _ in recording_engine.labels] == ["ALA42"]

    assert controller.highlight_residue(43, label="catalytic")
    assert [text for text, _ in recording_engine.labels] == ["catalytic"]

    assert not controller.highlight_residue(5)


def test_clear_highlight_restores_domain_colors(controller, recording_engine):
    controller.apply()
    controller.highlight_residue(42)
    assert controller.clear_highlight()
    assert recording_engine.style_at("A", 42).color == Color(DOMAIN_COLORS[0])
    assert recording_engine.labels == []


def test_export_image(controller):
    controller.apply()
    assert controller.export_image().startswith("data:image/png;base64,")


def test_update_display_style(controller, recording_engine):
    controller.apply()
    options = DisplayOptions(representation=Representation.SPHERE, background_color="black")
    assert controller.update_display_style(options)
    assert recording_engine.background == Color("black")
    assert recording_engine.style_at("A", 30).representation == Representation.SPHERE


@pytest.mark.parametrize(
    "operation",
    [
        lambda c: c.reset(),
        lambda c: c.highlight_domain(0),
        lambda c: c.zoom_in(),
        lambda c: c.highlight_residue(42),
        lambda c: c.export_image(),
    ],
)
def test_failed_operations_restore_domain_styling(engine_cls, two_chain_atoms, info, domains, operation):
    engine = engine_cls(two_chain_atoms)
    engine.load_model("", StructureFormat.MMCIF)
    controller = DomainStylingController(engine, info, domains)
    controller.apply()
    controller.highlight_residue(42)

    engine.fail_on = {"zoom_to", "zoom", "add_label", "export_image"}
    engine.fail_times = 1
    result = operation(controller)

    assert result in (False, None)
    assert engine.call_names()[-1] == "render"
    assert engine.style_at("A", 42).color == Color(DOMAIN_COLORS[0])
    assert engine.style_at("A", 30).opacity == 1.0


def test_failed_recovery_is_logged(engine_cls, two_chain_atoms, info, domains, caplog):
    engine = engine_cls(two_chain_atoms, fail_on={"zoom", "render"})
    engine.load_model("", StructureFormat.MMCIF)
    controller = DomainStylingController(engine, info, domains)

    assert not controller.zoom_in()
    assert "Could not restore domain styling" in caplog.text


def test_dispose_destroys_engine(recording_engine, info, domains):
    with DomainStylingController(recording_engine, info, domains) as controller:
        controller.apply()
    assert recording_engine.destroyed
    assert controller.is_disposed
    controller.dispose()  # idempotent
    with pytest.raises(EngineDisposedError):
        controller.highlight_domain(0)
    with pytest.raises(EngineDisposedError):
        controller.apply()


def test_label_failure_skips_only_that_domain(engine_cls, two_chain_atoms, info, domains):
    engine = engine_cls(two_chain_atoms, fail_on={"add_label"}, fail_times=1)
    engine.load_model("", StructureFormat.MMCIF)
    controller = DomainStylingController(
        engine, info, domains, options=DisplayOptions(show_labels=True)
    )

    report = controller.apply()

    assert [o.domain_id for o in report.styled] == ["d2"]
    assert report.styled_count == 1
    assert report.skipped_count == 2
    (failed,) = [o for o in report.skipped if o.domain_id == "d1"]
    assert "add_label failed" in failed.reason
    assert controller.mapped_selection(0) is None

    # d1 is back in the base style; d2 keeps its color and label.
    base = engine.style_at("A", 30)
    assert base.color == Color("gray")
    assert base.opacity == pytest.approx(0.8)
    assert engine.style_at("A", 100).color == Color(DOMAIN_COLORS[1])
    assert [text for text, _ in engine.labels] == ["d2"]
    assert engine.call_names()[-1] == "render"


def test_domain_matching_only_water_is_skipped(engine_cls, make_protein, make_ligand, make_domain):
    atoms = make_protein("A", [*range(20, 61), *range(80, 141)]) + make_ligand("A", 70, "HOH")
    engine = engine_cls(atoms)
    engine.load_model("", StructureFormat.MMCIF)
    info = ChainClassifier().classify(atoms)

    report = DomainStylingController(
        engine, info, [make_domain("gap", pdb_range="65-75"), make_domain("d2", 90, 100)]
    ).apply()

    assert [o.domain_id for o in report.skipped] == ["gap"]
    assert report.styled_count == 1
