import pytest

from poster_library.metrics import reset_metrics_for_tests
from poster_library.models import PosterItem


@pytest.fixture(autouse=True)
def _clean_metrics():
    reset_metrics_for_tests()


@pytest.fixture
def catalog():
    return [
        PosterItem(
            title="Canine Eye Disorders",
            category="eye-ear",
            file="posters/eye-ear/canine.jpg",
        ),
        PosterItem(
            title="Betta Care",
            category="fish_aquatics",
            file="posters/fish/betta.jpg",
            tags=["betta", "fish", "aquarium"],
        ),
        PosterItem(
            title="Feline Dental Chart",
            category="oral-dental",
            file="posters/oral-dental/feline_dental.png",
        ),
        PosterItem(
            title="Goldfish Anatomy",
            category="fish_aquatics",
            file="posters/fish/goldfish.jpg",
        ),
        PosterItem(
            title="Otitis Externa",
            category="eye-ear",
            file="posters/eye-ear/otitis.jpg",
            tags=["ear", "infection"],
        ),
    ]


@pytest.fixture
def manifest_payload(catalog):
    return {"items": [item.model_dump(exclude_none=True) for item in catalog]}


@pytest.fixture
def metric_value():
    from poster_library import metrics

    def _read(name, **labels):
        return metrics._REGISTRY.get_sample_value(name, labels)

    return _read
