import pytest
from requests.exceptions import ConnectionError

from firstboot_agent.errors import InventoryError
from firstboot_agent.lib.inventory import DeviceNetworkProfile, InventoryClient

URL = "http://osinstall./api/osinstall/v1/device/getNetworkBySn"

CONTENT = {
    "Bonding": "no",
    "Gateway": "10.0.0.1",
    "Hostname": "HOST-01",
    "Ip": "10.0.0.5",
    "Netmask": "255.255.255.0",
    "Trunk": "no",
    "Vlan": "",
    "HWADDR": "AA:BB:CC:DD:EE:FF",
}


def test_fetch_profile_decodes_envelope(make_session, make_response):
    session = make_session(make_response(200, {"Status": "success", "Message": "ok", "Content": CONTENT}))
    client = InventoryClient(URL, session=session)

    profile = client.fetch_profile("SN123")

    assert profile == DeviceNetworkProfile(
        bonding="no",
        gateway="10.0.0.1",
        hostname="HOST-01",
        ip="10.0.0.5",
        netmask="255.255.255.0",
        trunk="no",
        vlan="",
        hwaddr="AA:BB:CC:DD:EE:FF",
    )
    assert len(session.calls) == 1
    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == URL
    assert session.calls[0]["params"] == {"sn": "SN123", "type": "json"}


def test_fetch_profile_matches_keys_case_insensitively(make_session, make_response):
    body = {"status": "success", "content": {"hostname": "HOST-02", "hwaddr": "11:22:33:44:55:66"}}
    client = InventoryClient(URL, session=make_session(make_response(200, body)))

    profile = client.fetch_profile("SN9")

    assert profile.hostname == "HOST-02"
    assert profile.hwaddr == "11:22:33:44:55:66"
    assert profile.ip == ""


def test_null_content_gives_zero_profile(make_session, make_response):
    client = InventoryClient(URL, session=make_session(make_response(200, {"Status": "failure", "Content": None})))
    assert client.fetch_profile("") == DeviceNetworkProfile()


def test_non_200_carries_status_code(make_session, make_response):
    client = InventoryClient(URL, session=make_session(make_response(500, text="boom")))

    with pytest.raises(InventoryError) as exc:
        client.fetch_profile("SN123")

    assert exc.value.status_code == 500
    assert "500" in str(exc.value)


def test_malformed_json_is_an_error(make_session, make_response):
    client = InventoryClient(URL, session=make_session(make_response(200, text="{not json")))

    with pytest.raises(InventoryError) as exc:
        client.fetch_profile("SN123")
    assert exc.value.status_code is None


def test_non_object_body_is_an_error(make_session, make_response):
    client = InventoryClient(URL, session=make_session(make_response(200, ["a", "b"])))

    with pytest.raises(InventoryError):
        client.fetch_profile("SN123")


def test_transport_failure_is_an_error(make_session):
    session = make_session(ConnectionError("no route to host"))
    client = InventoryClient(URL, session=session)

    with pytest.raises(InventoryError):
        client.fetch_profile("SN123")
    assert len(session.calls) == 1
