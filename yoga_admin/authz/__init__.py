"""Role-based authorization core: role enumeration, evaluator, policies and legacy shim."""
