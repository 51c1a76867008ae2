# /template_canvas/codec/errors.py

class TemplateFormatError(ValueError):
    """The template file is not valid JSON or matches no known schema."""
