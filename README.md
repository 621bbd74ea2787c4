# rivetdb

rivetdb holds the metadata core of a query engine that caches tables from
remote databases: a catalog of connections and tables kept in SQLite, the
application configuration, the mapping of remote column types onto Arrow
data types, and the error types used when fetching data.

It is a library; it installs no commands.

## Configuration

`rivetdb.config.AppConfig.load(config_path, environ=None)` reads a
configuration file and overlays environment variables prefixed with
`RIVETDB_`. The file may be TOML (`.toml`), JSON (`.json`) or YAML
(`.yaml`, `.yml`). If `config_path` has none of these suffixes, the loader
tries `config_path` with each suffix appended, so `load("config")` finds
`config.yaml`. `environ` defaults to `os.environ`.

```yaml
server:
  host: 127.0.0.1   # default
  port: 3000        # default
catalog:
  type: sqlite      # or postgres
storage:
  type: filesystem  # or s3
paths:
  cache_dir: ./cache
  state_dir: ./state
```

Environment variable names are lower-cased and split on every `_` after
the prefix, so `RIVETDB_SERVER_PORT=8080` sets `server.port`. Because every
underscore separates a level, keys that contain an underscore themselves
(such as `paths.cache_dir`) cannot be set this way. Values `true` and
`false` become booleans, and numbers become integers or floats.

`AppConfig.from_dict(data)` builds the same object from a plain mapping.
`server`, `catalog` and `storage` are required sections, as are
`catalog.type` and `storage.type`; `paths` is optional.

`AppConfig.validate()` checks the sections:

- a `postgres` catalog needs `host`, `database`, `user` and `password`;
- a `sqlite` catalog needs nothing more;
- an `s3` storage needs `bucket`; a `filesystem` storage needs nothing more;
- any other catalog or storage type is rejected.

Every problem, in loading or in validation, raises `ConfigError` with a
message naming the missing field or the unknown type.

```python
from rivetdb.config import AppConfig

config = AppConfig.load("config.yaml", {"RIVETDB_SERVER_PORT": "8080"})
config.validate()
print(config.server.host, config.server.port)
```

## The catalog

`rivetdb.sqlite_catalog.SqliteCatalogManager` stores connections and the
tables discovered in them in a SQLite file, created if missing. It is safe
to share between threads and can be used as a context manager, which
closes it on exit; `close()` may be called more than once. Migrations are
idempotent and tracked in a `schema_migrations` table.

```python
from rivetdb.sqlite_catalog import SqliteCatalogManager

with SqliteCatalogManager("catalog.db") as catalog:
    catalog.run_migrations()

    conn_id = catalog.add_connection("warehouse", "duckdb", '{"path": "data.duckdb"}')
    table_id = catalog.add_table(conn_id, "public", "users", "{}")
    catalog.update_table_sync(table_id, "/cache/1/public/users", "/state/1/public/users.json")

    for table in catalog.list_tables(conn_id):
        print(table.schema_name, table.table_name, table.last_sync)

    catalog.clear_connection_cache_metadata("warehouse")
    catalog.delete_connection("warehouse")
```

Records come back as frozen dataclasses from `rivetdb.catalog_models`:
`ConnectionInfo` and `TableInfo`, each with `to_dict()`. Connections are
listed by name; tables by schema and table name. Adding a table that
already exists updates its stored schema and returns the same id.
`clear_table_cache_metadata` clears a table's paths and sync time and
returns the table as it was before. Operations on an unknown connection or
table raise `NotFoundError`; other database failures, and use after
`close()`, raise `CatalogError`.

`rivetdb.catalog_models.CatalogManager` is the abstract interface the
SQLite manager implements. `rivetdb.catalog_backend.CatalogBackend` runs
the catalog queries over any DB-API connection, given a placeholder style:
`sqlite_placeholder` (`?`) or `postgres_placeholder` (`$1`, `$2`, ...).
`rivetdb.migrations` has the `CatalogMigrations` base class and
`run_migrations(migrations)`, which applies any pending versions in order.

## Types and schemas

`rivetdb.types` defines `DataType` (with `TimeUnit` and `IntervalUnit`),
`Field`, `Schema`, `ColumnMetadata` and `TableMetadata`.
`TableMetadata.to_arrow_schema()` builds a `Schema` from discovered
columns, `Schema.to_json()` serialises it in Arrow's JSON form, and
`deserialize_arrow_schema(json_text)` reads it back, raising
`SchemaSerializationError` on bad input.

`duckdb_type_to_arrow` (in `rivetdb.duckdb_types`) and `pg_type_to_arrow`
(in `rivetdb.pg_types`) turn the type names reported by
`information_schema` into `DataType` values. Matching ignores case;
parameterised DuckDB types such as `VARCHAR(255)` map by their base name,
and unknown types fall back to `Utf8`. PostgreSQL `numeric`, `decimal`,
`time` and `interval` map to `Utf8` as well.

```python
from rivetdb.duckdb_types import duckdb_type_to_arrow
from rivetdb.pg_types import pg_type_to_arrow
from rivetdb.types import ColumnMetadata, TableMetadata, deserialize_arrow_schema

users = TableMetadata(
    catalog_name=None,
    schema_name="public",
    table_name="users",
    table_type="BASE TABLE",
    columns=[
        ColumnMetadata("id", duckdb_type_to_arrow("BIGINT"), False, 1),
        ColumnMetadata("created", pg_type_to_arrow("timestamp with time zone"), True, 2),
    ],
)
text = users.to_arrow_schema().to_json()
assert deserialize_arrow_schema(text) == users.to_arrow_schema()
```

`rivetdb.pg_types` also has two connection-string helpers:
`needs_ssl_retry(error_message)` tells whether a connection error says the
server requires SSL, and `with_sslmode_require(connection_string)` appends
`sslmode=require` to a connection string.

## Errors

Data-fetching failures in `rivetdb.errors` are subclasses of
`DataFetchError`: `DriverLoadError`, `FetchConnectionError`, `QueryError`,
`StorageError`, `UnsupportedDriverError`, `DiscoveryError` and
`SchemaSerializationError`. Each message starts with a short prefix such
as `query failed: `. `storage_error_from_os_error(exc)` wraps an `OSError`
as a `StorageError`.

## What the package does not do

rivetdb keeps metadata only. It does not connect to DuckDB or PostgreSQL
to discover tables or fetch rows, write Parquet files, manage cache
storage on disk or in S3, run queries, or serve HTTP. The configuration
accepts a `postgres` catalog, but only a SQLite-backed catalog manager is
provided.