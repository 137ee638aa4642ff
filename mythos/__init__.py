"""Mythos & Canvas: story, image, infographic and publishing studio."""

__version__ = "0.1.0"
