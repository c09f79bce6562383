"""Tests for gmailfilters/gmail_api.py Gmail client wrapper."""

import json
import os
import unittest
from unittest.mock import MagicMock, patch

from core.cli_errors import AuthError
from tests.fixtures import TempDirMixin

from gmailfilters.gmail_api import (
    BATCH_MODIFY_LIMIT,
    DEFAULT_TOKEN_URI,
    SCOPES,
    GmailClient,
    ensure_google_api,
)


def _client_with_service() -> tuple:
    client = GmailClient("/fake/creds.json", "/fake/token.json")
    service = MagicMock()
    client._service = service
    return client, service


class TestScopes(unittest.TestCase):
    def test_scopes_cover_labels_filters_and_messages(self):
        scope_texts = [s.split("/")[-1] for s in SCOPES]
        self.assertEqual(scope_texts, ["gmail.labels", "gmail.settings.basic", "gmail.modify"])


class TestEnsureGoogleApi(unittest.TestCase):
    def test_raises_when_dependencies_missing(self):
        with patch("gmailfilters.gmail_api.Credentials", None), \
             patch("gmailfilters.gmail_api.InstalledAppFlow", None), \
             patch("gmailfilters.gmail_api.build", None), \
             patch("gmailfilters.gmail_api.Request", None):
            with self.assertRaises(RuntimeError) as ctx:
                ensure_google_api()
            self.assertIn("Google API libraries not installed", str(ctx.exception))


class TestGmailClientInit(unittest.TestCase):
    def test_init_expands_paths(self):
        with patch.object(os.path, "expanduser", side_effect=lambda x: x.replace("~", "/home/user")):
            client = GmailClient("~/creds.json", "~/token.json")
        self.assertEqual(client.credentials_path, "/home/user/creds.json")
        self.assertEqual(client.token_path, "/home/user/token.json")

    def test_service_requires_authentication(self):
        client = GmailClient("/fake/creds.json", "/fake/token.json")
        with self.assertRaises(RuntimeError):
            client.service


class TestAuthenticate(TempDirMixin, unittest.TestCase):
    def test_valid_token_skips_flow(self):
        token_path = os.path.join(self.tmpdir, "token.json")
        with open(token_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        creds = MagicMock(valid=True, expired=False)
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build") as mock_build, \
             patch("gmailfilters.gmail_api.Request"):
            mock_creds.from_authorized_user_file.return_value = creds
            client = GmailClient(os.path.join(self.tmpdir, "creds.json"), token_path)
            client.authenticate()

        mock_flow.from_client_secrets_file.assert_not_called()
        mock_build.assert_called_once_with("gmail", "v1", credentials=creds)
        self.assertIs(client.creds, creds)

    def test_missing_credentials_raise_auth_error(self):
        with patch("gmailfilters.gmail_api.Credentials"), \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build"), \
             patch("gmailfilters.gmail_api.Request"):
            client = GmailClient(
                os.path.join(self.tmpdir, "missing.json"),
                os.path.join(self.tmpdir, "token.json"),
            )
            with self.assertRaises(AuthError):
                client.authenticate()
        mock_flow.from_client_secrets_file.assert_not_called()

    def test_flow_writes_token(self):
        creds_path = os.path.join(self.tmpdir, "creds.json")
        with open(creds_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        token_path = os.path.join(self.tmpdir, "sub", "token.json")
        new_creds = MagicMock(valid=True)
        new_creds.to_json.return_value = '{"token": "abc"}'
        with patch("gmailfilters.gmail_api.Credentials"), \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build"), \
             patch("gmailfilters.gmail_api.Request"):
            mock_flow.from_client_secrets_file.return_value.run_local_server.return_value = new_creds
            GmailClient(creds_path, token_path).authenticate()

        mock_flow.from_client_secrets_file.assert_called_once_with(creds_path, SCOPES)
        with open(token_path, encoding="utf-8") as fh:
            self.assertEqual(fh.read(), '{"token": "abc"}')

    def test_expired_token_refreshed_and_saved(self):
        token_path = os.path.join(self.tmpdir, "token.json")
        with open(token_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        creds = MagicMock(valid=True, expired=True, refresh_token="rt")
        creds.to_json.return_value = '{"token": "fresh"}'
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build"), \
             patch("gmailfilters.gmail_api.Request"):
            mock_creds.from_authorized_user_file.return_value = creds
            GmailClient(os.path.join(self.tmpdir, "creds.json"), token_path).authenticate()

        creds.refresh.assert_called_once()
        mock_flow.from_client_secrets_file.assert_not_called()
        with open(token_path, encoding="utf-8") as fh:
            self.assertEqual(fh.read(), '{"token": "fresh"}')

    def test_flow_uses_requested_port(self):
        creds_path = os.path.join(self.tmpdir, "creds.json")
        with open(creds_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        new_creds = MagicMock(valid=True)
        new_creds.to_json.return_value = "{}"
        with patch("gmailfilters.gmail_api.Credentials"), \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build"), \
             patch("gmailfilters.gmail_api.Request"):
            flow = mock_flow.from_client_secrets_file.return_value
            flow.run_local_server.return_value = new_creds
            GmailClient(creds_path, os.path.join(self.tmpdir, "token.json")).authenticate(port=8080)

        flow.run_local_server.assert_called_once_with(port=8080)


class TestRefreshToken(TempDirMixin, unittest.TestCase):
    def _write_client_secrets(self):
        creds_path = os.path.join(self.tmpdir, "creds.json")
        with open(creds_path, "w", encoding="utf-8") as fh:
            json.dump({"installed": {"client_id": "cid", "client_secret": "secret"}}, fh)
        return creds_path

    def test_refresh_token_builds_credentials_without_token_file(self):
        creds_path = self._write_client_secrets()
        token_path = os.path.join(self.tmpdir, "token.json")
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build") as mock_build, \
             patch("gmailfilters.gmail_api.Request"):
            client = GmailClient(creds_path, token_path, refresh_token="rt-1")
            client.authenticate()

        mock_creds.assert_called_once_with(
            token=None,
            refresh_token="rt-1",
            token_uri=DEFAULT_TOKEN_URI,
            client_id="cid",
            client_secret="secret",
            scopes=SCOPES,
        )
        mock_creds.return_value.refresh.assert_called_once()
        mock_creds.from_authorized_user_file.assert_not_called()
        mock_flow.from_client_secrets_file.assert_not_called()
        mock_build.assert_called_once_with("gmail", "v1", credentials=mock_creds.return_value)
        self.assertFalse(os.path.exists(token_path))

    def test_rejected_refresh_token_raises_auth_error(self):
        creds_path = self._write_client_secrets()
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow"), \
             patch("gmailfilters.gmail_api.build") as mock_build, \
             patch("gmailfilters.gmail_api.Request"):
            mock_creds.return_value.refresh.side_effect = RuntimeError("invalid_grant")
            client = GmailClient(creds_path, os.path.join(self.tmpdir, "token.json"), refresh_token="bad")
            with self.assertRaisesRegex(AuthError, "invalid_grant"):
                client.authenticate()
        mock_build.assert_not_called()


class TestValidateToken(TempDirMixin, unittest.TestCase):
    def test_valid_token_checks_profile(self):
        token_path = os.path.join(self.tmpdir, "token.json")
        with open(token_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow") as mock_flow, \
             patch("gmailfilters.gmail_api.build") as mock_build, \
             patch("gmailfilters.gmail_api.Request"):
            mock_creds.from_authorized_user_file.return_value = MagicMock(valid=True, expired=False)
            service = mock_build.return_value
            service.users().getProfile().execute.return_value = {"emailAddress": "me@example.com"}
            address = GmailClient(os.path.join(self.tmpdir, "creds.json"), token_path).validate_token()

        self.assertEqual(address, "me@example.com")
        mock_flow.from_client_secrets_file.assert_not_called()

    def test_profile_failure_raises_auth_error(self):
        token_path = os.path.join(self.tmpdir, "token.json")
        with open(token_path, "w", encoding="utf-8") as fh:
            fh.write("{}")
        with patch("gmailfilters.gmail_api.Credentials") as mock_creds, \
             patch("gmailfilters.gmail_api.InstalledAppFlow"), \
             patch("gmailfilters.gmail_api.build") as mock_build, \
             patch("gmailfilters.gmail_api.Request"):
            mock_creds.from_authorized_user_file.return_value = MagicMock(valid=True, expired=False)
            mock_build.return_value.users().getProfile().execute.side_effect = RuntimeError("401 unauthorized")
            client = GmailClient(os.path.join(self.tmpdir, "creds.json"), token_path)
            with self.assertRaisesRegex(AuthError, "401 unauthorized"):
                client.validate_token()


class TestGmailClientCalls(unittest.TestCase):
    def test_list_labels(self):
        client, service = _client_with_service()
        service.users().labels().list().execute.return_value = {"labels": [{"id": "L1", "name": "A"}]}
        self.assertEqual(client.list_labels(), [{"id": "L1", "name": "A"}])

    def test_create_label_body(self):
        client, service = _client_with_service()
        labels = service.users().labels()
        labels.create.return_value.execute.return_value = {"id": "L2", "name": "New"}
        self.assertEqual(client.create_label("New", labelListVisibility="labelShow")["id"], "L2")
        labels.create.assert_called_with(userId="me", body={"name": "New", "labelListVisibility": "labelShow"})

    def test_list_filters(self):
        client, service = _client_with_service()
        service.users().settings().filters().list().execute.return_value = {"filter": [{"id": "F1"}]}
        self.assertEqual(client.list_filters(), [{"id": "F1"}])

    def test_list_filters_empty_response(self):
        client, service = _client_with_service()
        service.users().settings().filters().list().execute.return_value = {}
        self.assertEqual(client.list_filters(), [])

    def test_create_and_delete_filter(self):
        client, service = _client_with_service()
        filters = service.users().settings().filters()
        client.create_filter({"from": "a"}, {"addLabelIds": ["STARRED"]})
        filters.create.assert_called_with(
            userId="me", body={"criteria": {"from": "a"}, "action": {"addLabelIds": ["STARRED"]}}
        )
        client.delete_filter("F1")
        filters.delete.assert_called_with(userId="me", id="F1")

    def test_batch_modify_splits_at_limit(self):
        client, service = _client_with_service()
        messages = service.users().messages()
        ids = [f"m{i}" for i in range(BATCH_MODIFY_LIMIT + 1)]
        client.batch_modify_messages(ids, add_label_ids=["L1"], remove_label_ids=["INBOX"])

        bodies = [c.kwargs["body"] for c in messages.batchModify.call_args_list]
        self.assertEqual([len(b["ids"]) for b in bodies], [BATCH_MODIFY_LIMIT, 1])
        self.assertEqual(bodies[0]["addLabelIds"], ["L1"])
        self.assertEqual(bodies[0]["removeLabelIds"], ["INBOX"])

    def test_batch_modify_empty_is_noop(self):
        client, service = _client_with_service()
        client.batch_modify_messages([], add_label_ids=["L1"])
        service.users().messages().batchModify.assert_not_called()

    def test_list_message_ids_pages(self):
        client, service = _client_with_service()
        messages = service.users().messages()
        messages.list.return_value.execute.side_effect = [
            {"messages": [{"id": "a"}, {"id": "b"}], "nextPageToken": "t1"},
            {"messages": [{"id": "c"}]},
        ]
        self.assertEqual(client.list_message_ids(query="from:x"), ["a", "b", "c"])
        last = messages.list.call_args_list[-1].kwargs
        self.assertEqual(last["q"], "from:x")
        self.assertEqual(last["pageToken"], "t1")


if __name__ == "__main__":
    unittest.main()
