class DocumentInspectionError(Exception):
    """Raised when a document cannot be opened as the format it claims to be."""
