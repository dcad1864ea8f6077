"""Resolve Decentralized Identifiers (DIDs) into DID Documents."""
