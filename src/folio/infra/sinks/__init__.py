"""Output sinks."""

from folio.infra.sinks.filesystem import FileSystemOutputSink

__all__ = ["FileSystemOutputSink"]
