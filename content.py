# content.py
"""
The testimonials content collection.

Each testimonial is a Markdown file whose front matter carries the fields
of TESTIMONIAL_SCHEMA. This module parses the front matter, validates it
against the schema and loads a whole collection directory.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# --- Data Contracts ---
#
# parse_front_matter(text: str) -> Tuple[Dict[str, str], str]:
#   - Outputs: (fields, body). Text without a leading '---' block yields
#     ({}, text).
#
# validate_testimonial(data: Dict[str, Any], source: Optional[Path] = None) -> Testimonial:
#   - Raises: ContentValidationError listing every missing, empty or
#     mistyped field of TESTIMONIAL_SCHEMA.
#
# load_testimonials(directory) -> List[Testimonial]:
#   - Outputs: every *.md entry, sorted by file name.
#   - Raises: ContentValidationError for the first invalid entry.

TESTIMONIAL_SCHEMA = {
    "author": str,
    "position": str,
    # Either a remote URL or a path to an image next to the entry.
    "image": str,
}

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".avif", ".svg"}

_FRONT_MATTER_SPLIT = re.compile(r"^---\s*$", flags=re.MULTILINE)


class ContentValidationError(ValueError):
    def __init__(self, source, errors: List[str]):
        self.source = source
        self.errors = errors
        where = f"{source}: " if source else ""
        super().__init__(where + "; ".join(errors))


@dataclass
class Testimonial:
    author: str
    position: str
    image: str
    body: str = ""
    source: Optional[Path] = None
    image_path: Optional[Path] = None


def parse_front_matter(text: str) -> Tuple[Dict[str, str], str]:
    if not text.startswith("---"):
        return {}, text

    parts = _FRONT_MATTER_SPLIT.split(text, maxsplit=2)
    if len(parts) < 3:
        return {}, text

    fields: Dict[str, str] = {}
    for line in parts[1].splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        fields[key.strip()] = value
    return fields, parts[2].strip()


def _is_remote(image: str) -> bool:
    return image.startswith(("http://", "https://", "//"))


def _resolve_image(image: str, source: Optional[Path]) -> Optional[Path]:
    if source is None or _is_remote(image):
        return None
    candidate = (source.parent / image).resolve()
    if candidate.is_file() and candidate.suffix.lower() in IMAGE_SUFFIXES:
        return candidate
    return None


def validate_testimonial(
    data: Dict[str, Any], source: Optional[Path] = None, body: str = ""
) -> Testimonial:
    errors = []
    for name, expected in TESTIMONIAL_SCHEMA.items():
        value = data.get(name)
        if value is None:
            errors.append(f"missing required field '{name}'")
        elif not isinstance(value, expected):
            errors.append(f"field '{name}' must be {expected.__name__}, got {type(value).__name__}")
        elif not value.strip():
            errors.append(f"field '{name}' is empty")

    if errors:
        raise ContentValidationError(source, errors)

    image = data["image"].strip()
    return Testimonial(
        author=data["author"].strip(),
        position=data["position"].strip(),
        image=image,
        body=body,
        source=source,
        image_path=_resolve_image(image, source),
    )


def load_testimonials(directory) -> List[Testimonial]:
    directory = Path(directory)
    if not directory.is_dir():
        logging.warning(f"Testimonials directory not found at {directory}.")
        return []

    entries = []
    for path in sorted(directory.glob("*.md")):
        fields, body = parse_front_matter(path.read_text(encoding="utf-8"))
        try:
            entries.append(validate_testimonial(fields, source=path, body=body))
        except ContentValidationError as e:
            logging.error(f"Invalid testimonial entry: {e}")
            raise

    logging.info(f"Loaded {len(entries)} testimonials from {directory}.")
    return entries
