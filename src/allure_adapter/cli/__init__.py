"""CLI package for allure-adapter."""

from allure_adapter.cli.app import app


def main() -> int:
    """Main entry point for the CLI."""
    return app()


__all__ = ["app", "main"]
