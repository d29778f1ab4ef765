"""Calendar gateways."""
