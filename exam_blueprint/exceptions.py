"""
Exceptions raised at the collaborator boundaries (file reading, question
generation, export). The syllabus parser and the blueprint assembler never raise.
"""


class ExamBlueprintError(Exception):
    """Base exception for the package."""
    pass


class SyllabusReadError(ExamBlueprintError):
    """Raised when an uploaded syllabus file cannot be turned into text."""
    pass


class QuestionGenerationError(ExamBlueprintError):
    """Raised when the question generator rejects a request."""
    pass


class ExportError(ExamBlueprintError):
    """Raised when questions cannot be rendered for download."""
    pass
