# switchblade

Helpers for writing integration tests against applications that are built
with buildpacks: naming and staging application source, packing tarballs,
cleaning up after a deployment, and checking build output and served content.

The package has no dependencies outside the standard library.

## Installation

```
pip install switchblade
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install "switchblade[test]"
pytest
```

## Modules

### `switchblade.random_name`

`random_name()` returns a lower-case name of the form `switchblade-<id>`,
where `<id>` is nine random characters.

### `switchblade.source`

`source(path)` copies the directory `path` into a new temporary directory,
keeping symbolic links as links, and writes a `.switchblade-key` file of 32
random bytes (mode `0600`) into the copy, so that every copy is unique. It
returns the path of the new directory. If copying fails, the temporary
directory is removed and the error is raised.

### `switchblade.tgz_archiver`

`TGZArchiver` writes a gzip-compressed tarball:

```python
from switchblade.tgz_archiver import TGZArchiver

TGZArchiver().compress("app", "out/app.tgz")
TGZArchiver().with_prefix("/some/path").compress("app.tgz", "out/app.tgz")
```

- `compress(input_path, output_path)` accepts either a directory or an
  existing `.tar.gz` file as input and creates the output's parent
  directories as needed.
  - A directory is walked in lexical order without following symbolic links;
    link targets are stored relative to the link's own directory.
  - A tarball is read and its entries are copied over.
- Every entry is owned by `vcap` (uid and gid 2000).
- `with_prefix(prefix)` returns a new archiver that places each entry under
  `prefix`.

Failures raise `OSError` with a message naming the step, for example
`failed to open file: ...`. An input that is neither a directory nor a
regular file raises `ValueError("unknown file type")`.

### `switchblade.teardown`

`Teardown(client, networks, workspace)` cleans up after an application.
`Teardown.run(name)` does the following, in order:

1. Calls `client.container_remove(name, force=True)`. A
   `ContainerNotFoundError` raised by the client is ignored.
2. Calls `networks.delete("switchblade-internal")`. The name is available as
   `INTERNAL_NETWORK_NAME`.
3. Deletes the following from `workspace`:
   - `droplets/<name>.tar.gz`
   - `source/<name>.tar.gz`
   - `buildpacks/<name>.tar.gz`
   - the directory `buildpacks/<name>`
   - `build-cache/<name>.tar.gz`

Artifacts that are already missing are skipped. Any other failure raises
`TeardownError`, for example `failed to delete network: ...`.

The client and network manager are supplied by the caller. Any objects with
these methods will do.

## Matchers

### `contain_lines`

`contain_lines(*expected)` from `switchblade.contain_lines` checks that text
holds the expected lines one directly after another. An expected item is
either a value compared for equality or an object with a `match(actual)`
method, which is called with the line.

Before lines are compared, step prefixes such as `[builder] ` are stripped.
The actual value may be a string, an `io.StringIO`, or any object that
defines `__str__`; anything else raises `TypeError`. Calling `contain_lines()`
with no arguments raises `ValueError`.

```python
from switchblade.contain_lines import contain_lines

matcher = contain_lines("some-line-content", "other-line-content")
logs = "[builder] some-line-content\n[builder] other-line-content"
assert matcher.match(logs)
```

### `serve`

`serve(expected)` from `switchblade.serve` takes any object with an
`external_url` string attribute. It fetches that URL, with its path replaced
by the matcher's endpoint (the root by default), and matches when:

- the response status is `200 OK`, and
- the body equals `expected`, or, when `expected` has a `match` method,
  `expected.match(body)` is true.

Use `with_endpoint(path)` to request another path. Requests to `localhost`
and loopback addresses bypass any configured proxy.

A value without `external_url` raises `TypeError`. A URL with an invalid
percent escape, or with a scheme other than `http` or `https`, raises
`ValueError`. The body of the last response is kept in `response`.

```python
from dataclasses import dataclass

from switchblade.serve import serve


@dataclass
class Deployment:
    external_url: str


deployment = Deployment("http://localhost:8080")
matcher = serve("some string").with_endpoint("/health")
if not matcher.match(deployment):
    print(matcher.failure_message(deployment))
```

When a matcher does not match, both matchers offer `failure_message(actual)`
and `negated_failure_message(actual)` to describe why.

## What this package does not do

This package does not deploy applications. It has no platform client,
container runtime client, buildpack registry or staging step. `Teardown` only
calls the client and network manager it is given, and `serve` only reads
`external_url` from whatever deployment object it is handed. The package
provides no command-line program.