# hierlog

Hierarchical, category-based logging. Messages are sent to named categories
arranged in a dot-separated tree (`app`, `app.db`, `app.db.pool`). Each category
has a priority and a set of appenders, and while it is additive it also passes
events to the appenders of its ancestors. Appenders write events through layouts,
which turn each event into text.

The package has no third-party dependencies.

## Priorities

Priorities come from `hierlog.priority.Priority`. A lower number is more severe:
`EMERG`/`FATAL` (0), `ALERT` (100), `CRIT` (200), `ERROR` (300), `WARN` (400),
`NOTICE` (500), `INFO` (600), `DEBUG` (700) and `NOTSET` (800). A category logs
an event when its effective priority (its own, or the first one set on an
ancestor) is equal to or greater than the event's priority. The root category
starts at `INFO` and refuses `NOTSET`.

```python
from hierlog.priority import get_priority_name, get_priority_value

get_priority_value("WARN")   # 400
get_priority_value("250")    # 250
get_priority_name(300)       # "ERROR"
```

`get_priority_value` raises `ValueError` for a name it does not know.

## Logging to categories

```python
import sys

from hierlog import category
from hierlog.appender import OstreamAppender
from hierlog.pattern import PatternLayout
from hierlog.priority import Priority

appender = OstreamAppender("console", sys.stdout)
layout = PatternLayout()
layout.set_conversion_pattern("%d [%p] %c: %m%n")
appender.set_layout(layout)

root = category.get_root()
root.add_appender(appender, True)
root.set_priority(Priority.DEBUG)

db = category.get_instance("app.db")
db.info("connected to %s", "primary")
db.debug("pool size is %d", 8)
```

Messages with arguments are formatted printf-style (`hierlog.stringutil.vform`).
Each `Category` has `log`, `debug`, `info`, `notice`, `warn`, `error`, `crit`,
`alert`, `emerg` and `fatal`, plus `add_appender`, `remove_appender`,
`remove_all_appenders`, `get_all_appenders` and the `additivity` attribute.
An appender added with `owned=True` is disposed of when the category removes it.

The module-level functions `get_root`, `get_instance`, `exists`,
`get_current_categories`, `set_root_priority`, `get_root_priority`, `shutdown`
and `shutdown_forced` work on the default `HierarchyMaintainer`.

A category stream builds up a message piece by piece and logs it when flushed;
if the priority is not enabled, the pieces are discarded:

```python
with db.get_stream(Priority.NOTICE) as stream:
    stream << "rows: " << 42
```

`hierlog.fixedcontext.FixedContextCategory` logs through an existing category
but tags every event with a fixed context string instead of the nested
diagnostic context.

## Layouts

- `hierlog.layout.BasicLayout`: `<seconds> <PRIORITY> <category> <ndc>: <message>`
- `hierlog.layout.SimpleLayout`: `<PRIORITY>: <message>`, the priority padded to eight characters
- `hierlog.layout.PassThroughLayout`: the message alone
- `hierlog.pattern.PatternLayout`: a conversion pattern made of these specifiers:
  `%m` message, `%n` newline, `%c` category (`%c{2}` keeps the last two parts),
  `%d` local date and time (`%d{ISO8601}` (the default), `%d{ABSOLUTE}`, `%d{DATE}`
  or a strftime format in which `%l` gives milliseconds), `%p` priority,
  `%r` milliseconds since the package was loaded, `%R` seconds since the epoch,
  `%t` thread, `%u` processor time, `%x` nested diagnostic context and `%%` a
  literal percent sign. Widths such as `%-10p` (pad, left-aligned) and `%.20m`
  (truncate) are supported. A malformed pattern raises
  `hierlog.errors.ConfigureFailure`.

## Appenders

Every appender is registered by name; `hierlog.appender.get_appender`,
`reopen_all`, `close_all` and `delete_all_appenders` work on that registry.

- `hierlog.appender.OstreamAppender` writes to any text stream.
- `hierlog.appender.StringQueueAppender` keeps formatted messages in memory; see
  `queue_size()` and `pop_message()`.
- `hierlog.appender.BufferingAppender` holds up to `max_size` events until a
  `TriggeringEventEvaluator` such as `LevelEvaluator` fires, then passes them to
  a sink appender as one event. With `lossy` set, the oldest event is dropped
  when the buffer is full; otherwise the buffer is dumped.
- `hierlog.fileappender.FileAppender` writes to a file or an open descriptor.
  `RollingFileAppender` rolls the file over once `max_file_size` is reached and
  keeps numbered backups up to `max_backup_index`.
- `hierlog.dailyrolling.DailyRollingFileAppender` starts a new file each day,
  renaming the old one to `<file>.YYYY-MM-DD`, and deletes matching files older
  than `max_days_to_keep` days (30 by default).
- `hierlog.syslog.RemoteSyslogAppender` sends UDP syslog datagrams to a relay
  host (port 514 by default), splitting messages longer than 900 bytes.
- `hierlog.appender.AbortAppender` aborts the process when it receives an event.

Each appender derived from `AppenderSkeleton` has a `threshold` and an optional
`filter`: a chain of `hierlog.filter.Filter` subclasses that return
`Decision.ACCEPT`, `DENY` or `NEUTRAL`; a `NEUTRAL` decision passes the event to
the next filter in the chain.

## Nested diagnostic context

The context is kept per thread.

```python
from hierlog import ndc

ndc.push("request-17")
ndc.push("user=alice")
ndc.get()   # "request-17 user=alice"
ndc.pop()   # "user=alice"
```

## Configuration

Configure from a properties file:

```
rootCategory=WARN, console
category.app.db=DEBUG, dbfile
additivity.app.db=false

appender.console=ConsoleAppender
appender.console.layout=SimpleLayout

appender.dbfile=RollingFileAppender
appender.dbfile.fileName=db.log
appender.dbfile.maxFileSize=1048576
appender.dbfile.maxBackupIndex=3
appender.dbfile.layout=PatternLayout
appender.dbfile.layout.ConversionPattern=%d %p %c %x - %m%n
```

```python
from hierlog.propertyconfig import configure

configure("logging.properties")
```

`PropertyConfigurator().do_configure(source)` accepts a file name or any
iterable of lines. Appender types are `ConsoleAppender` (`target` is `stdout`
or `stderr`), `FileAppender`, `RollingFileAppender`, `DailyRollingFileAppender`
(`maxDaysKeep`), `SyslogAppender` (`syslogHost`, `facility`, `portNumber`) and
`AbortAppender`; every appender may set a `threshold`. Layout types are
`BasicLayout`, `SimpleLayout` and `PatternLayout`. A leading `log4j.` or
`log4cpp.` on keys is ignored, `#` starts a comment, and values may refer to
environment variables or to other properties with `${name}`. Errors raise
`hierlog.errors.ConfigureFailure`.

`hierlog.properties.Properties` is the dictionary the file is loaded into, with
`load`, `save`, `get_int`, `get_bool` and `get_string`.

For a quick start, `hierlog.basic_configurator.configure()` sets the root to
`INFO` and sends its events to standard output with `BasicLayout`.

## Factories

`hierlog.factories.AppendersFactory.get_instance()` and
`hierlog.factories.LayoutsFactory.get_instance()` create appenders and layouts
by type name (`"file"`, `"roll file"`, `"daily roll file"`, `"remote syslog"`,
`"abort"`; `"simple"`, `"basic"`, `"pattern"`, `"pass through"`) from a mapping
of string parameters, wrapped as `hierlog.errors.FactoryParams`. Further types
can be added with `register_creator`; unknown or duplicate names raise
`ValueError`.

## What it does not do

There is no command-line program. Syslog output goes over UDP only; there is no
appender for the local system logger, for e-mail or for operating-system event
logs.

## Running the tests

```
pip install -e ".[test]"
pytest
```