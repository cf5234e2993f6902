"""budxray - ALB-fronted Lambda function with X-Ray trace context propagation.

Example:
    >>> from budxray.main import lambda_handler
    >>> lambda_handler({"httpMethod": "GET", "path": "/api/hello", "headers": {}}, None)["statusCode"]
    200
"""

from budxray.__about__ import __version__

__all__ = ["__version__"]
