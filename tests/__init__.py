# =============================================================================
# TELEWIND - TEST SUITE
# =============================================================================
#
# Structure:
#   tests/
#     unit/           - Sector, tracker, window, parser, models, config
#     integration/    - SQLite store, Telegram, HTTP client, monitor, CLI
#     fixtures/       - Saved anemometer page
#     mock_data.py    - Observation factories, fake clock, scripted source
#
# Usage:
#   python run_tests.py                  # All tests
#   python run_tests.py --quick          # Offline smoke test
#   pytest tests/unit/                   # Unit tests only
#
# =============================================================================
