"""Carrier integrations: request builders, response parsers, registry."""
