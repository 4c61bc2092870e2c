"""Request builders and result types for blocks, transactions, calls and logs of the "eth" namespace."""