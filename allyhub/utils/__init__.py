"""Shared utilities: configuration, execution contexts and observables."""
