"""Response normalisation shared by the mock and live gateways."""
