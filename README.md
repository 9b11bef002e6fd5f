# k7tui

A full-screen terminal interface, built on urwid, for a video management
service. From the console you can:

- log in to an account or register a new one
- upload a video file of up to 500 MB, streamed to the service in 64 KiB chunks
- list your videos and your three most recent videos
- receive real-time notifications over a WebSocket connection
- try the whole interface in demo mode, with sample data

## Installation

```
pip install .
```

With the test suite:

```
pip install .[test]
pytest
```

## Running

```
k7tui
```

Before starting, the command loads a `.env` file from the current directory
if one exists. It accepts one option:

| Option                  | Meaning                                                          |
|-------------------------|------------------------------------------------------------------|
| `--grpc-addr HOST:PORT` | Address of the repository service (default: `$GRPC_ADDR`, else `localhost:50051`) |

The command exits with status 0 when you quit and 1 if the interface fails.

Notifications are read from `ws://localhost:8080/ws/<user id>` once you switch
the WebSocket connection on from the dashboard. Each message is a JSON object;
its `type` and `message` string fields become the notification's type and
text (`notification` and `New notification received` when missing). Only the
50 most recent notifications are kept.

## What the command does not do

The package contains no network client for the repository service. The
`k7tui` command only reports the configured address in a log warning and
starts without a client, so **Login**, **Register**, **Upload** and
**Recent Videos** answer with a "gRPC client not initialized" (or "not
available") message. **Demo Mode** works, as do the video list, the
notification list and the WebSocket connection. To drive the interface
against a service, give `TuiApp` a state holding your own client (see below).

## Using the interface

The main menu:

| Key | Action                                        |
|-----|-----------------------------------------------|
| `l` | Login                                         |
| `r` | Register                                      |
| `d` | Dashboard (only when logged in)               |
| `m` | Demo Mode: log in as `demo_user` with sample videos and notifications |
| `q` | Quit                                          |

On the dashboard:

| Key | Action                                  |
|-----|-----------------------------------------|
| `u` | Upload a video                          |
| `v` | List your videos                        |
| `n` | Show notifications                      |
| `s` | Show your 3 most recent videos          |
| `r` | Refresh the video list                  |
| `w` | Connect or disconnect the WebSocket     |
| `m` | Return to the main menu                 |
| `l` | Log out                                 |
| `q` | Quit                                    |

Press `Esc` in the video, recent-video and notification lists to return to
the dashboard. The upload form has a **Browse Files** button that opens a
dialog for typing the file path.

## Using it as a library

- `k7tui.models` holds the records (`UserResponse`, `VideoMetadataResponse`,
  `VideoMetadata`, `VideoChunk`, `Notification`) and the `RepoServiceClient`
  protocol that a service client must implement.
- `k7tui.state.AppState` holds the session: user, videos, notifications and
  the client in `grpc_client`.
- `k7tui.controller.Controller` carries out login, registration, uploads,
  refreshes and demo mode, and builds the dashboard text and table rows.
- `k7tui.demo.MockRepoServiceClient` is an in-memory client that answers
  every call with demo data.
- `k7tui.upload.upload_video(client, file_path, title, description, user_id)`
  sends a metadata message followed by the file in 64 KiB chunks;
  `iter_upload_requests` yields that stream.
- `k7tui.notifier.WebSocketManager` keeps the notification connection;
  `watch_notifications(user_id)` is a generator of the raw JSON messages.
- `k7tui.menu.MainMenuModel` is a small key-driven selection model.
- `k7tui.ui.TuiApp` is the urwid application.

```python
from k7tui.controller import Controller
from k7tui.demo import MockRepoServiceClient
from k7tui.state import AppState

state = AppState(grpc_client=MockRepoServiceClient())
controller = Controller(state)
controller.enable_demo_mode()
print(controller.dashboard_text())
```

To run the full interface with a client of your own:

```python
from k7tui.demo import MockRepoServiceClient
from k7tui.state import AppState
from k7tui.ui import TuiApp

TuiApp(AppState(grpc_client=MockRepoServiceClient())).run()
```