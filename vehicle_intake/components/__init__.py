"""UI-independent state and behavior of the inspection widgets."""
