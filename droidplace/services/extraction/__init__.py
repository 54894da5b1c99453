"""Code-block extraction from model responses."""

from .service import CodeBlockExtractor, ExtractedBlock, can_generate_file

__all__ = ["CodeBlockExtractor", "ExtractedBlock", "can_generate_file"]
