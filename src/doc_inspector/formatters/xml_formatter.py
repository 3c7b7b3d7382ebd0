"""XML formatter rendered from a Jinja2 template."""

import os
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .base import Formatter, ValidationResults, document_name, group_by_sentence


class XmlFormatter(Formatter):
    """
    Renders the results with the ``errors.xml`` template.

    Values are escaped by Jinja2 autoescaping, so sentences containing
    ``<`` or ``&`` produce well-formed XML.
    """

    def __init__(self, template_dir: Optional[str] = None):
        if template_dir is None:
            template_dir = os.path.join(
                os.path.dirname(os.path.dirname(__file__)), "templates"
            )
        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(['html', 'xml'])
        )

    def format(self, results: ValidationResults) -> str:
        documents = []
        for document, errors in results:
            groups = []
            for group in group_by_sentence(errors):
                groups.append({
                    "line": group.line,
                    "offset": group.offset,
                    "sentence": group.sentence.content if group.sentence else "",
                    "errors": [error.to_dict() for error in group.errors],
                })
            documents.append({
                "name": document_name(document),
                "error_count": len(errors),
                "groups": groups,
            })
        template = self.env.get_template('errors.xml')
        return template.render(documents=documents) + "\n"
