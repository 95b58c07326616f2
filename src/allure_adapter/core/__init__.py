"""Core building blocks shared across allure_adapter."""
