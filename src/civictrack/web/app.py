from __future__ import annotations

import logging

from flask import Flask

from civictrack.classifier.remote import RemoteClassifier
from civictrack.config import CivicTrackConfig
from civictrack.sources import IssueSource, JSONIssueSource, StaticIssueSource

logger = logging.getLogger(__name__)


def create_app(
    source: IssueSource | None = None,
    config: CivicTrackConfig | None = None,
    classifier: RemoteClassifier | None = None,
) -> Flask:
    """Create and configure the Flask app."""
    app = Flask(__name__)
    config = config or CivicTrackConfig()

    if source is None:
        if config.issues_path:
            source = JSONIssueSource(config.issues_path)
        else:
            logger.warning("No issue source configured; serving an empty issue list")
            source = StaticIssueSource()
    if classifier is None:
        classifier = config.remote_classifier()

    app.extensions["civictrack_config"] = config
    app.extensions["issue_source"] = source
    app.extensions["remote_classifier"] = classifier

    from civictrack.web.routes.api import api_bp

    app.register_blueprint(api_bp, url_prefix="/api")

    return app
