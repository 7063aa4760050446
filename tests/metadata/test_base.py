"""Tests for the provider base classes."""

import pytest

from moviewatchlist.metadata.base import ImageProvider, MetadataProvider, SimilarityProvider
from moviewatchlist.metadata.clients import OMDbClient, TMDBClient, TMDBImageClient


@pytest.mark.parametrize("base", [MetadataProvider, ImageProvider, SimilarityProvider])
def test_base_classes_are_abstract(base: type) -> None:
    with pytest.raises(TypeError):
        base()


def test_concrete_clients_implement_roles() -> None:
    assert issubclass(OMDbClient, MetadataProvider)
    assert issubclass(TMDBImageClient, ImageProvider)
    assert issubclass(TMDBClient, SimilarityProvider)
    assert OMDbClient.name == "omdb"
    assert TMDBClient.name == "tmdb"
