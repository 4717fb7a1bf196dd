"""
Template rendering and target path construction.

- template: Literal-replace placeholder engine (`{title}`, `{season:02d}`,
  `{title[0]}`, ...) with separator, lowercase and unsafe-character passes.
- formatter: Field maps built from metadata records plus technical info, and
  the full target paths for movies and TV episodes.
"""
from .formatter import (
    build_movie_fields,
    build_tv_fields,
    generate_movie_path,
    generate_tv_path,
)
from .template import pad2, render_directory_template, render_template

__all__ = [
    "render_template",
    "render_directory_template",
    "pad2",
    "build_movie_fields",
    "build_tv_fields",
    "generate_movie_path",
    "generate_tv_path",
]
