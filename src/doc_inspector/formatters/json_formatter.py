"""JSON formatter."""

import json

from .base import Formatter, ValidationResults, document_name, group_by_sentence


class JsonFormatter(Formatter):
    """Renders ``[{document, errors: [{sentence, position, errors}]}]``."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, results: ValidationResults) -> str:
        payload = [
            {
                "document": document_name(document),
                "errors": [group.to_dict() for group in group_by_sentence(errors)],
            }
            for document, errors in results
        ]
        return json.dumps(payload, ensure_ascii=False, indent=self.indent)
