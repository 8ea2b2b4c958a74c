"""Artifact payloads written by the config writer."""
