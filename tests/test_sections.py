from poster_library.config import DEFAULT_SECTION_LABELS
from poster_library.models import PosterItem
from poster_library.sections import SectionLabeler, build_sections


def _items(*categories):
    return [PosterItem(title=f"Poster {i}", category=c, file=f"{c}/{i}.jpg") for i, c in enumerate(categories)]


def test_build_sections_counts_and_orders_by_label():
    items = _items("skin", "eye-ear", "fish_aquatics", "eye-ear", "skin", "eye-ear")
    labeler = SectionLabeler(DEFAULT_SECTION_LABELS)

    sections = build_sections(items, labeler)

    assert [(s.id, s.label, s.count) for s in sections] == [
        ("eye-ear", "Eye & Ear", 3),
        ("fish_aquatics", "Fish & Aquatics", 1),
        ("skin", "Skin", 2),
    ]
    assert sum(section.count for section in sections) == len(items)


def test_sections_group_by_id_not_label():
    sections = build_sections(_items("skin-coat", "skin_coat", "skin-coat"))

    assert [(s.id, s.label, s.count) for s in sections] == [
        ("skin-coat", "Skin Coat", 2),
        ("skin_coat", "Skin Coat", 1),
    ]


def test_sections_are_case_sensitive():
    sections = build_sections(_items("Skin", "skin"))
    assert sorted(section.id for section in sections) == ["Skin", "skin"]
    assert {section.label for section in sections} == {"Skin"}


def test_sections_sort_ignores_case():
    sections = build_sections(_items("zoonoses", "anatomy", "Behaviour"))
    assert [section.label for section in sections] == ["Anatomy", "Behaviour", "Zoonoses"]


def test_labeler_without_overrides_prettifies():
    labeler = SectionLabeler()
    assert labeler.label("eye-ear") == "Eye Ear"
    assert SectionLabeler({"eye-ear": "Eyes"}).label("eye-ear") == "Eyes"


def test_empty_catalog_has_no_sections():
    assert build_sections([]) == []
