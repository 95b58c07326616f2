"""Allow running allure_adapter as a module: python -m allure_adapter."""

from allure_adapter.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
