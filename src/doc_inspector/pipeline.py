"""Validation pipeline for the document inspector.

This module dispatches the configured validators over parsed documents:
section validators see each section, sentence validators each sentence of
each section, document validators each document.
"""

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from .config.models import Configuration
from .interfaces.validator import Validator
from .models.document import Document, DocumentCollection
from .models.enums import ValidatorScope
from .models.validation import ValidationError
from .validators.factory import ValidatorFactory, get_validator_factory


logger = logging.getLogger(__name__)


@dataclass
class PipelineStats:
    """Statistics about pipeline execution."""

    documents_checked: int = 0
    errors_found: int = 0
    errors_suppressed: int = 0
    failed_invocations: int = 0
    total_processing_time: float = 0.0


class ValidationPipeline:
    """
    Runs validators over documents in a deterministic order.

    The order of the returned errors is: validator registration order,
    then document order, then section order, then sentence order within a
    section (headers, paragraphs, list elements). A validator that raises
    on one invocation is logged and skipped for that invocation only.
    Errors covered by a suppress comment of the document are dropped.
    """

    def __init__(self, validators: Iterable[Validator]):
        self.validators: List[Validator] = list(validators)
        self.stats = PipelineStats()

    @classmethod
    def from_configuration(
        cls,
        configuration: Configuration,
        factory: Optional[ValidatorFactory] = None,
    ) -> "ValidationPipeline":
        """
        Build a pipeline from a configuration.

        Raises:
            ConfigurationError: If a validator name is unknown or one of its
                attributes is invalid.
        """
        factory = factory or get_validator_factory()
        validators = [
            factory.create_validator(config, configuration.symbol_table)
            for config in configuration.validator_configs
        ]
        logger.info(f"Validation pipeline initialized with {len(validators)} validators")
        return cls(validators)

    def check(
        self, documents: Union[DocumentCollection, Iterable[Document]]
    ) -> List[ValidationError]:
        """Validate every document and return all errors."""
        documents = list(documents)
        start_time = time.time()
        errors: List[ValidationError] = []
        for validator in self.validators:
            for document in documents:
                errors.extend(self._run(validator, document))
        self.stats.documents_checked += len(documents)
        self.stats.errors_found += len(errors)
        self.stats.total_processing_time += time.time() - start_time
        logger.info(f"Checked {len(documents)} documents: {len(errors)} errors")
        return errors

    def check_document(self, document: Document) -> List[ValidationError]:
        """Validate a single document."""
        return self.check([document])

    def check_each(
        self, documents: Union[DocumentCollection, Iterable[Document]]
    ) -> List[Tuple[Document, List[ValidationError]]]:
        """Validate documents one by one, pairing each with its errors."""
        return [(document, self.check_document(document)) for document in documents]

    def _run(self, validator: Validator, document: Document) -> List[ValidationError]:
        errors: List[ValidationError] = []
        if validator.scope is ValidatorScope.DOCUMENT:
            errors.extend(self._invoke(validator, document))
        else:
            for section in document.sections:
                if validator.scope is ValidatorScope.SECTION:
                    errors.extend(self._invoke(validator, section))
                else:
                    for sentence in section.iter_sentences():
                        errors.extend(self._invoke(validator, sentence))
        if document.suppress_rules:
            kept = [
                e for e in errors
                if not document.is_suppressed(e.line_number, e.validator_name)
            ]
            if len(kept) < len(errors):
                self.stats.errors_suppressed += len(errors) - len(kept)
                logger.debug(
                    f"{validator.name}: {len(errors) - len(kept)} errors suppressed "
                    f"in {document.file_name or '<input>'}"
                )
            errors = kept
        for error in errors:
            error.file_name = document.file_name
        return errors

    def _invoke(self, validator: Validator, target) -> List[ValidationError]:
        try:
            return list(validator.validate(target))
        except Exception:
            self.stats.failed_invocations += 1
            logger.exception(f"Validator {validator.name} failed; its result is skipped")
            return []
