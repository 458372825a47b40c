"""Command line interface for mediaupload."""
