"""Runtime types: nil, scopes, function values and control signals."""
