from poster_library.models import PosterItem
from poster_library.tags import derive_tags, effective_tag_text, effective_tags


def test_derive_tags_from_title_category_and_file():
    item = PosterItem(
        title="Canine Eye Disorders",
        category="eye-ear",
        file="posters/eye-ear/canine.jpg",
    )

    tags = derive_tags(item)

    # path separators are stripped, not split on
    assert tags == ("canine", "eye", "disorders", "ear", "posterseye", "earcaninejpg")


def test_derive_tags_drops_short_tokens():
    item = PosterItem(title="An ox is big", category="GI", file="")
    assert derive_tags(item) == ("big",)


def test_derive_tags_deduplicates_before_truncating():
    item = PosterItem(title=" ".join(["cat"] * 20) + " dog")
    assert derive_tags(item) == ("cat", "dog")


def test_derive_tags_caps_at_twelve():
    words = [f"word{letter}" for letter in "abcdefghijklmnop"]
    item = PosterItem(title=" ".join(words))

    tags = derive_tags(item)

    assert len(tags) == 12
    assert tags == tuple(words[:12])


def test_derive_tags_empty_item():
    assert derive_tags(PosterItem()) == ()
    assert derive_tags(PosterItem(title="a b", category="xy", file="z")) == ()


def test_derived_tags_are_unique_and_long_enough():
    item = PosterItem(
        title="Feline Dental Care & Oral Health",
        category="oral-dental",
        file="posters/oral-dental/feline_dental.png",
    )
    tags = derive_tags(item)
    assert len(tags) == len(set(tags))
    assert all(len(tag) >= 3 and tag.isalnum() and tag == tag.lower() for tag in tags)


def test_effective_tags_prefer_explicit_tags():
    item = PosterItem(title="Betta Care", category="fish_aquatics", tags=["Betta", "fish"])
    assert effective_tags(item) == ("Betta", "fish")
    assert effective_tag_text(item) == "Betta fish"


def test_effective_tags_fall_back_when_tags_empty():
    item = PosterItem(title="Betta Care", category="fish", tags=[])
    assert item.tags is None
    assert effective_tag_text(item) == "betta care fish"


def test_string_tags_are_wrapped():
    item = PosterItem(title="Betta Care", tags="aquarium")
    assert item.tags == ("aquarium",)
    assert effective_tag_text(item) == "aquarium"
