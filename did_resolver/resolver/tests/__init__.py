DOC = {
    "@context": "https://www.w3.org/ns/did/v1",
    "id": "did:example:1234abcd",
    "verificationMethod": [
        {
            "id": "did:example:1234abcd#4",
            "type": "RsaVerificationKey2018",
            "controller": "did:example:1234abcd",
            "publicKeyPem": "-----BEGIN PUBLIC X…",
        },
        {
            "id": "did:example:1234abcd#5",
            "type": "Ed25519VerificationKey2020",
            "controller": "did:example:1234abcd",
            "publicKeyMultibase": "z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK",
        },
        {
            "id": "did:example:1234abcd#6",
            "type": "JsonWebKey2020",
            "controller": "did:example:1234abcd",
            "publicKeyJwk": {
                "kty": "OKP",
                "crv": "X25519",
                "x": "hSDwCYkwp1R0i33ctD73Wg2_Og0mOBr066SpjqqbTmo",
            },
        },
    ],
    "authentication": [
        {
            "id": "did:example:1234abcd#ted",
            "controller": "did:example:1234abcd",
            "type": "Ed25519VerificationKey2020",
            "publicKeyMultibase": "z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK",
        },
        "did:example:1234abcd#5",
    ],
    "assertionMethod": ["#5"],
    "keyAgreement": ["did:example:1234abcd#6"],
    "service": [
        {
            "id": "did:example:1234abcd#did-communication",
            "type": "did-communication",
            "priority": 0,
            "recipientKeys": ["did:example:1234abcd#4"],
            "routingKeys": ["did:example:1234abcd#6"],
            "serviceEndpoint": "http://example.com",
        }
    ],
}
