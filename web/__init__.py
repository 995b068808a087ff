"""HTTP front end for the validation report."""

from web.app import VALIDATE_PAGE, create_app

__all__ = ["VALIDATE_PAGE", "create_app"]
