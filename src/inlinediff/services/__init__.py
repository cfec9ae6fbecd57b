from typing import TYPE_CHECKING

from ..config import Config
from ..diff import DiffGenerator
from .annotation_service import AnnotationService
from .inline_diff_service import InlineDiffService

# Import interfaces for type checking
if TYPE_CHECKING:
    from .interfaces import IAnnotationService, IDiffEngine, IInlineDiffService
else:
    # Create aliases for runtime to avoid circular imports
    IAnnotationService = AnnotationService
    IDiffEngine = DiffGenerator
    IInlineDiffService = InlineDiffService


class ServiceFactory:
    """Factory for creating and providing service instances.

    This factory ensures proper dependency injection and lazy initialization
    of service instances, following the dependency inversion principle.
    """

    def __init__(self, config: Config, engine: "IDiffEngine | None" = None):
        self.config = config
        self._engine: IDiffEngine | None = engine
        self._annotation_service: AnnotationService | None = None
        self._inline_diff_service: InlineDiffService | None = None

    @property
    def engine(self) -> IDiffEngine:
        """Get the diff engine instance."""
        if self._engine is None:
            self._engine = DiffGenerator()
        return self._engine

    @property
    def annotation(self) -> IAnnotationService:
        """Get the annotation service instance."""
        if self._annotation_service is None:
            self._annotation_service = AnnotationService()
        return self._annotation_service

    @property
    def inline_diff(self) -> IInlineDiffService:
        """Get the inline diff service instance."""
        if self._inline_diff_service is None:
            self._inline_diff_service = InlineDiffService(
                self.engine, self.annotation, self.config
            )
        return self._inline_diff_service
