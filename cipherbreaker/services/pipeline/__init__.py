"""
Scoring and orchestration for the cipher breakers.

1. Score candidate plaintext for English plausibility (`scorer`)
2. Validate decrypted words against the dictionary (`validator`)
3. Run the breakers as a cost-ordered cascade and rank the results (`orchestrator`)

Submodules are imported directly; the engines depend on the scorer and the
orchestrator depends on the engines.
"""
