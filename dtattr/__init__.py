"""Device tree attributes: in-memory trees, typed attributes, attribute databases and text rendering."""

__version__ = "0.1.0"