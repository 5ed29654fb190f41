"""Rule-driven analysis engines: mutation, DOM scanning and CSP evaluation."""
