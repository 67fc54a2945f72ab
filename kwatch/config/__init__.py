"""Loading and resolution of the kwatch configuration document."""
