"""Compose webpack, babel and snowpack configs from selectable features."""
