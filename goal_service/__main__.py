"""
Run the Health Goal Service with ``python -m goal_service``.

Copyright (C) 2025 Maigie

Licensed under the Business Source License 1.1 (BUSL-1.1).
See LICENSE file in the repository root for details.
"""

from .main import run

if __name__ == "__main__":
    run()
