# This file is part of netapply. See LICENSE file for license information.

# Volume labels searched, in order, for the network-config document
CONFIG_LABELS = ["CIDATA", "cidata"]

NETWORK_CONFIG_FILENAME = "network-config"

# Renames are applied asynchronously by the OS: poll for the new name
# this many times, sleeping RENAME_POLL_INTERVAL seconds in between.
RENAME_POLL_ATTEMPTS = 20
RENAME_POLL_INTERVAL = 0.2

IPV4_NO_GATEWAY = "0.0.0.0"
IPV6_NO_GATEWAY = "::0"
