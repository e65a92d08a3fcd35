"""Core layer: the submission port and the activation use cases.

Core depends only on pirule.schemas, pirule.rules and pirule.common; gateway
adapters live in pirule.gateways.
"""
