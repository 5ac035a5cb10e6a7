from __future__ import annotations

# Positional epsilon for near-zero distance/length checks.
EPS_POS = 1e-12
