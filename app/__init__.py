"""Classical cipher workbench service."""
