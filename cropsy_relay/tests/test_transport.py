from unittest.mock import MagicMock, patch

from cropsy_relay.transport import UdpOscTransport


def _transport():
    return UdpOscTransport(listen_host="0.0.0.0", listen_port=1235, target_host="127.0.0.1", target_port=1234)


@patch('cropsy_relay.transport.SimpleUDPClient')
def test_send_creates_client_once(mock_client_class):
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client
    transport = _transport()

    transport.send("/izzy/cropValues/001", 89.895833, 89.895833, 50.0, 44.444444)
    transport.send("/izzy/cropValues/002", 49.0625, 49.0625, 1.431493, 48.9, 98.568507, 48.9)

    mock_client_class.assert_called_once_with("127.0.0.1", 1234)
    assert mock_client.send_message.call_count == 2
    first_call = mock_client.send_message.call_args_list[0]
    assert first_call.args == ("/izzy/cropValues/001", [89.895833, 89.895833, 50.0, 44.444444])


def test_on_message_maps_handler():
    transport = _transport()
    handler = MagicMock()

    transport.on_message("/zgc/cropValues", handler)

    handlers = list(transport.dispatcher.handlers_for_address("/zgc/cropValues"))
    assert [h.callback for h in handlers] == [handler]


def test_unmatched_messages_go_to_default_handler():
    transport = _transport()
    transport.on_message("/zgc/cropValues", MagicMock())

    handlers = list(transport.dispatcher.handlers_for_address("/zgc/other"))
    assert len(handlers) == 1
    assert handlers[0].callback == UdpOscTransport._log_unhandled


@patch('cropsy_relay.transport.BlockingOSCUDPServer')
def test_listen_serves_until_stopped_and_closes(mock_server_class):
    mock_server = MagicMock()
    mock_server_class.return_value = mock_server
    transport = _transport()

    transport.listen()

    mock_server_class.assert_called_once_with(("0.0.0.0", 1235), transport.dispatcher)
    mock_server.serve_forever.assert_called_once()
    mock_server.server_close.assert_called_once()


@patch('cropsy_relay.transport.BlockingOSCUDPServer')
def test_listen_closes_server_on_interrupt(mock_server_class):
    mock_server = MagicMock()
    mock_server.serve_forever.side_effect = KeyboardInterrupt
    mock_server_class.return_value = mock_server
    transport = _transport()

    try:
        transport.listen()
    except KeyboardInterrupt:
        pass

    mock_server.server_close.assert_called_once()
    transport.close()
    mock_server.shutdown.assert_not_called()
