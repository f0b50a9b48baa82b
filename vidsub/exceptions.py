"""Custom Exceptions for the VidSub application."""

class VidSubError(Exception):
    """Base class for exceptions in this package."""
    pass

class ConfigurationError(VidSubError):
    """Exception raised for errors in configuration loading."""
    pass

class ValidationError(VidSubError):
    """Raised when an uploaded video is rejected before processing."""

    def __init__(self, title: str, description: str):
        super().__init__(description)
        self.title = title
        self.description = description

class ModelInitializationError(VidSubError):
    """Exception raised when the speech or translation models cannot be loaded."""
    pass

class AudioExtractionError(VidSubError):
    """Exception raised for errors during audio extraction."""
    pass

class TranscriptionError(VidSubError):
    """Exception raised for errors during transcription."""
    pass

class TranslationError(VidSubError):
    """Exception raised for errors during translation."""
    pass

class FormattingError(VidSubError):
    """Exception raised for errors during subtitle formatting."""
    pass

class FileSystemError(VidSubError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass

class InvalidTransitionError(VidSubError):
    """Raised when the progress tracker is asked to move somewhere it cannot go."""
    pass
