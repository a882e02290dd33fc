from unittest.mock import patch


EVENT = {
    "event": "singlebillpayment.status",
    "data": {"tx_ref": "tx-123", "status": "success", "amount": 1500},
    "meta_data": {"source": "bills"},
}


class TestWebhookSignature:
    def test_valid_signature_acknowledged(self, client):
        with patch("api.webhook._handle_event") as handle:
            resp = client.post("/webhook", json=EVENT, headers={"flutterwave-signature": "test-secret-hash"})

        assert resp.status_code == 200
        assert resp.json() == {"received": True}
        event = handle.call_args.args[0]
        assert event.event == "singlebillpayment.status"
        assert event.data["tx_ref"] == "tx-123"
        assert event.meta_data == {"source": "bills"}

    def test_mismatched_signature_short_circuits(self, client):
        with patch("api.webhook._handle_event") as handle:
            resp = client.post("/webhook", json=EVENT, headers={"flutterwave-signature": "wrong"})

        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid signature"}
        handle.assert_not_called()

    def test_missing_signature_short_circuits(self, client):
        with patch("api.webhook._handle_event") as handle:
            resp = client.post("/webhook", json=EVENT)

        assert resp.status_code == 401
        handle.assert_not_called()

    def test_rejected_payload_is_not_logged(self, client, caplog):
        with caplog.at_level("INFO", logger="api.webhook"):
            client.post("/webhook", json=EVENT, headers={"flutterwave-signature": "wrong"})
        assert "tx-123" not in caplog.text

    def test_accepted_payload_is_logged(self, client, caplog):
        with caplog.at_level("INFO", logger="api.webhook"):
            resp = client.post("/webhook", json=EVENT, headers={"flutterwave-signature": "test-secret-hash"})
        assert resp.status_code == 200
        assert "Flutterwave webhook body" in caplog.text
        assert "singlebillpayment.status" in caplog.text

    def test_unconfigured_secret_rejects_everything(self, client, settings):
        settings.FLW_SECRET_HASH = ""
        resp = client.post("/webhook", json=EVENT, headers={"flutterwave-signature": ""})
        assert resp.status_code == 401


class TestWebhookPayload:
    def test_unknown_event_type_still_acknowledged(self, client):
        resp = client.post(
            "/webhook",
            json={"event": "something.new", "data": {}},
            headers={"flutterwave-signature": "test-secret-hash"},
        )
        assert resp.status_code == 200

    def test_unparseable_body_is_500(self, client):
        resp = client.post(
            "/webhook",
            content=b"{not json",
            headers={"flutterwave-signature": "test-secret-hash", "content-type": "application/json"},
        )
        assert resp.status_code == 500
        assert resp.json() == {"error": "Webhook handler failed"}
