"""Topic catalog - secret words and imposter hints."""

from .topics import Topic, TopicCatalog, load_catalog

__all__ = ["Topic", "TopicCatalog", "load_catalog"]
