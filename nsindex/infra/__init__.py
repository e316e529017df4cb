"""Infrastructure layer: store connection, configuration, exceptions."""
