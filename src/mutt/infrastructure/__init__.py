"""
Infrastructure layer for mutt: the conformance checker, the contract
mixins, the iterator operations and adapters, and the `collect` allocators.
"""
