"""
droidplace services.

One service per engine component, leaves first: sniffing, signature
detection, package inference, resource classification, naming, resolution
and placement, plus code-block extraction for chat responses.
"""

from .extraction import CodeBlockExtractor, ExtractedBlock, can_generate_file
from .naming import SourceFileNamer
from .packages import PackageInferencer
from .placement import PlacementGuard
from .resolution import PathResolver
from .resources import ResourceClassifier
from .signatures import AndroidSignatureDetector
from .sniffing import ContentSniffer

__all__ = [
    "AndroidSignatureDetector",
    "CodeBlockExtractor",
    "ContentSniffer",
    "ExtractedBlock",
    "PackageInferencer",
    "PathResolver",
    "PlacementGuard",
    "ResourceClassifier",
    "SourceFileNamer",
    "can_generate_file",
]
