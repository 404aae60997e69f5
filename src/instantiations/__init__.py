"""Concrete curve instantiations of the VOPRF core."""
