from .sinks import ChunkTextSink

__all__ = ["ChunkTextSink"]
