from .metadata import MetadataBridgePort
from .site import SearchClientPort, SlugProberPort, StreamExtractorPort

__all__ = [
    "MetadataBridgePort",
    "SearchClientPort",
    "SlugProberPort",
    "StreamExtractorPort",
]
