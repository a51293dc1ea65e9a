"""Shared fixtures: a representative AWS troubleshooting page and record factories."""

from __future__ import annotations

from typing import Any

import pytest

from troubledocs.models.content import ContentRecord, TroubleshootingCategory

S3_BASE = "https://docs.aws.amazon.com/AmazonS3/latest/userguide/"
ACCESS_DENIED_URL = (
    "https://docs.aws.amazon.com/IAM/latest/UserGuide/troubleshoot-access-denied.html"
)

SAMPLE_PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
<title>Troubleshoot access denied errors - Amazon Web Services</title>
<meta name="description" content="Learn how to troubleshoot IAM access denied errors.">
<meta name="keywords" content="IAM, access denied, troubleshooting, policies">
<script>var banner = "<h2>not a heading</h2>";</script>
</head>
<body>
<div id="nav"><h1>Navigation</h1></div>
<div id="main-content">
<h1>Troubleshoot access denied errors</h1>
<p>If you receive an Error: AccessDenied when calling an AWS API, check your policies.</p>
<div class="note"><p>Nested note inside the main content.</p></div>
<h2>Common causes</h2>
<p>Missing permissions in the identity-based policy.</p>
<ol>
<li>Open the IAM console and choose <b>Policies</b>.</li>
<li>Short</li>
<li>Run <code>aws iam get-policy --policy-arn arn:aws:iam::111122223333:policy/Ex</code> now.</li>
</ol>
<h3>Solution for HTTP 403 Forbidden</h3>
<p>Update the bucket policy so that the principal is allowed to call s3:GetObject.</p>
<pre class="programlisting lang-json">{"Version": "2012-10-17", "Statement": []}</pre>
</div>
<div id="footer"><h2>Footer</h2></div>
</body>
</html>
"""


@pytest.fixture()
def sample_page_html() -> str:
    return SAMPLE_PAGE_HTML


@pytest.fixture()
def make_record():
    """Factory for ContentRecord with sensible defaults."""

    def _make(**overrides: Any) -> ContentRecord:
        fields: dict[str, Any] = {
            "title": "S3 Access Denied Troubleshooting",
            "service": "s3",
            "url": S3_BASE + "troubleshoot-403-errors.html",
            "description": "Resolve 403 errors returned by Amazon S3.",
            "keywords": ["S3", "403", "bucket policy"],
            "category": TroubleshootingCategory.ACCESS_DENIED,
        }
        fields.update(overrides)
        return ContentRecord(**fields)

    return _make


@pytest.fixture()
def access_denied_url() -> str:
    return ACCESS_DENIED_URL
