# This file is part of netapply. See LICENSE file for license information.

import pytest

from netapply.exceptions import NetworkConfigError
from netapply.net import network_config
from netapply.net.network_config import InterfaceEntry, RouteSpec
from tests.unittests.helpers import NETWORK_CONFIG, dedent


class TestLoadNetworkConfig:
    def test_full_document(self):
        config = network_config.load_network_config(NETWORK_CONFIG)
        assert list(config.ethernets) == ["eth0", "eth1"]
        assert config.ethernets["eth0"] == InterfaceEntry(
            key="eth0",
            macaddress="AA-BB-CC-DD-EE-FF",
            set_name="Ethernet0",
            addresses=("10.0.0.5/24", "2001:db8::1/64"),
            routes=(
                RouteSpec(to="0.0.0.0/0", via="10.0.0.1", metric=100),
                RouteSpec(to="::/0", via="::0", metric=200),
            ),
            nameservers=("8.8.8.8", "1.1.1.1", "2001:4860:4860::8888"),
            mtu=1450,
        )
        assert config.ethernets["eth1"] == InterfaceEntry(
            key="eth1",
            macaddress="52:54:00:12:34:ab",
            set_name="Ethernet1",
            addresses=("192.168.10.2/24",),
        )
        assert [entry.key for entry in config] == ["eth0", "eth1"]
        assert len(config) == 2

    def test_commented_keys_keep_the_entry(self):
        config = network_config.load_network_config(
            dedent(
                """
                ethernets:  # adapters
                  eth0:
                    match:
                      macaddress: aa:bb:cc:dd:ee:ff
                    set-name: Ethernet0
                    addresses: # static
                      - 10.0.0.1/24
                """
            )
        )
        assert config.ethernets["eth0"] == InterfaceEntry(
            key="eth0",
            macaddress="aa:bb:cc:dd:ee:ff",
            set_name="Ethernet0",
            addresses=("10.0.0.1/24",),
        )

    def test_network_wrapper_is_unwrapped(self):
        config = network_config.load_network_config(
            dedent(
                """
                network:
                  version: 2
                  ethernets:
                    nic:
                      match:
                        macaddress: aa:bb:cc:dd:ee:ff
                      set-name: lan
                """
            )
        )
        assert config.ethernets["nic"].set_name == "lan"

    def test_optional_fields_default_to_empty(self):
        config = network_config.load_network_config(
            dedent(
                """
                ethernets:
                  nic:
                    match:
                    set-name: lan
                    mtu:
                    nameservers:
                """
            )
        )
        entry = config.ethernets["nic"]
        assert entry.macaddress == ""
        assert entry.addresses == ()
        assert entry.routes == ()
        assert entry.nameservers == ()
        assert entry.mtu is None

    def test_invalid_integers_are_ignored(self, caplog):
        config = network_config.load_network_config(
            dedent(
                """
                ethernets:
                  nic:
                    set-name: lan
                    mtu: big
                    routes:
                      - to: 10.1.0.0/16
                        via: 10.0.0.1
                        metric: low
                """
            )
        )
        entry = config.ethernets["nic"]
        assert entry.mtu is None
        assert entry.routes == (
            RouteSpec(to="10.1.0.0/16", via="10.0.0.1", metric=None),
        )
        assert "Ignoring invalid mtu 'big'" in caplog.text

    def test_malformed_routes_are_skipped(self):
        config = network_config.load_network_config(
            dedent(
                """
                ethernets:
                  nic:
                    routes:
                      - 10.1.0.0/16
                      - via: 10.0.0.1
                      - to: 10.2.0.0/16
                """
            )
        )
        assert config.ethernets["nic"].routes == (
            RouteSpec(to="10.2.0.0/16", via=None, metric=None),
        )

    @pytest.mark.parametrize(
        "text", ["", "version: 2\n", "ethernets: eth0\n", "- ethernets\n"]
    )
    def test_missing_ethernets(self, text):
        with pytest.raises(NetworkConfigError):
            network_config.load_network_config(text)

    def test_as_dict(self):
        config = network_config.load_network_config(NETWORK_CONFIG)
        as_dict = config.as_dict()
        assert as_dict["ethernets"]["eth0"]["routes"][1] == {
            "to": "::/0",
            "via": "::0",
            "metric": 200,
        }
        assert as_dict["ethernets"]["eth1"] == {
            "match": {"macaddress": "52:54:00:12:34:ab"},
            "set-name": "Ethernet1",
            "addresses": ["192.168.10.2/24"],
        }
