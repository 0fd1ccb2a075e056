"""
Test suite for the simulation harness.

Focus areas:
- Canonical serialization determinism
- State machine purity and first-failure-wins
- Query, dispatch and navigation building blocks
- ProgramTest scenarios end to end
- Replay determinism and the CLI
"""
