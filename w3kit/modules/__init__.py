"""Request builders for the admin, debug, net, txpool and web3 RPC namespaces."""