# mediahub

The core services of a living-room media hub, and a command that runs its
streaming server.

## What is in the package

- `mediahub.globalsettings`: `GlobalSettings` and the `Option` enum. Each option
  has a command-line name, a default and a help text. You can read a value with
  `value()` or `is_enabled()` and change one with `set_value()`. Values can also
  come from a config file through `load_config_file()`, or from arguments
  through `parse_arguments()`. `subscribe()` registers a callback that gets
  `(name, value)` on every change, and returns a function that unsubscribes it.
- `mediahub.libraryinfo`: ordered search paths for resources. `skin_paths`,
  `application_paths`, `translation_paths`, `resource_paths`,
  `keyboard_map_paths`, `qml_import_paths` and `plugin_paths` each return a
  list. `thumbnail_path`, `data_path`, `temp_path`, `log_path` and
  `database_file_path` each return one location. A path set in the settings
  comes first. A `QMH_<KIND>_PATH` environment variable, such as
  `QMH_KEYMAPS_PATH`, is also searched.
- `mediahub.actionmapper`: `ActionMapper` turns keys into the key codes of
  `Action` members such as `LEFT`, `ENTER`, `MEDIA_PLAY_PAUSE` or `BACK`. It
  delivers them as `KeyEvent`s to a recipient callable. The bindings come from
  keymap files on the keymap search paths, and the `keymap` option chooses the
  file (`stdkeyboard` by default). Each line of a keymap file has the form
  `Action=Key,Key`, for example `MediaPlayPause=Space,P` or
  `ContextualUp=PageUp`. `available_maps()` lists the keymap files found.
  `take_action()` sends the key press and release for an action.
  `process_key()` sends a character code. `event_filter()` rewrites a mapped
  key event.
- `mediahub.appsmanager`: `AppsManager.find_applications()` returns every
  directory on the application search paths that holds a `qmhmanifest.qml`.
- `mediahub.files`: `read_all_lines()` reads the lines of a text file. It stops
  after five empty lines in a row and drops any trailing empty lines.
  `find_files()` lists the files below a directory whose names match any of the
  given patterns, case-insensitively.
- `mediahub.mediaplayer`: `AbstractMediaPlayer` is the playback interface.
  `Status` holds the loading states. `TestingPlayer` is a backend that plays
  nothing; it logs every call and records it in `calls`.
- `mediahub.contextcontent`: `ContextContentRpc` passes context content
  announcements, invalidations and item selections on to connected callbacks.
- `mediahub.dbreader`: `DbReader` runs SQLite queries with positional
  bindings on its own connection. It returns the rows as dicts and emits them
  to `data_ready` listeners. A call to `stop()` ends reading and delivery.
- `mediahub.httpserver`:
  - `server.HttpServer` is a threaded TCP server. It answers each connection
    with `client.HttpClientHandler`.
  - `server.find_address()` picks the address the server advertises.
  - Requests:
    - `GET /<type>/<id>` returns the file named in the `filepath` column of
      the row with that id. The type is `music`, `picture` or `video`, and it
      is also the table name.
    - `GET /<type>/thumbnail/<id>` returns the file named in the `thumbnail`
      column. Music has no thumbnails.
    - `GET /qml/<skin>/<file>` returns `<skin dir>/remoteqml/<file>`.
  - A `Range: bytes=N-` header gets a `206` answer, with the data taken from
    the `uri` column. Pictures do not accept ranges.
  - Stored paths must be `file:` URLs.
  - A file that cannot be opened gets `404`.
- `mediahub.discovery`: `DeviceExposure` listens on UDP port 52107. For each
  `QtMediaHub:` probe it receives, it sends the probe plus the host name back
  to the sender on port 52108.
- `mediahub.ipaddresses`: `ipv4_addresses()` lists the IPv4 addresses of
  interfaces that are up and are not loopback. `IpAddressFinder` holds such a
  list and refreshes it.

## Installation

```
pip install .
```

## Command line

To list every option with its help text and default value:

```
mediahub -help
```

To run the streaming server:

```
mediahub -headless=true -streamingPort 1337
```

The command does the following, in order:

1. It reads `~/.sasquatch/config` if that file exists. Each line has the form
   `name=value`; lines that start with `#`, `;` or `[` are skipped.
2. It applies the command-line arguments, which take precedence over the file.
   Options are written `-name value`, `-name=value` or a bare `-name`, which
   means true.
3. If `-proxy` is on, it sets the proxy environment variables from
   `-proxyHost` and `-proxyPort`.
4. If `-log` is on, it writes log messages to files named `qmh-log-*.log` in
   the temp directory.
5. It serves media from the database at `database_file_path()`.

## Using the library

```python
from mediahub.globalsettings import GlobalSettings, Option

settings = GlobalSettings()
settings.parse_arguments(["-keymap=stdkeyboard", "-mouse", "false"])
print(settings.value(Option.KEYMAP))      # "stdkeyboard"
print(settings.is_enabled(Option.MOUSE))  # False
```

```python
from mediahub.httpserver.server import HttpServer

server = HttpServer(settings, 1337, skins={"myskin": "/path/to/myskin"},
                    database="/path/to/media.db")
server.serve_forever()
```

## What the package does not do

- There is no graphical interface. Without `-headless true`, `mediahub` logs an
  error and exits with status 1.
- Skins are not discovered. The streaming server serves remote QML only for the
  skins passed to `HttpServer` as a name-to-directory mapping. The command
  passes none.
- The package does not scan media files into the database. It only reads a
  database that already exists.

## Running the tests

```
pip install .[test]
pytest
```