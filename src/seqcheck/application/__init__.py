"""Application layer: matchers, query recording, verification, reporting."""
