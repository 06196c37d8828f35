"""
GraphQL documents understood by VSC API nodes.
"""

SUBMIT_TX_QUERY = """
query SubmitTx($sig: String!, $tx: String!) {
    submitTransactionV1(sig: $sig, tx: $tx) {
        id
    }
}
"""

GET_NONCE_QUERY = """
query GetNonce($keyGroup: [String]!) {
  getAccountNonce(keyGroup: $keyGroup) {
    nonce
  }
}
"""
