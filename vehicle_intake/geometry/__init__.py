"""Pure geometry for the fuel gauge and diagram hit testing."""
