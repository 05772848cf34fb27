# hashtab

Tools for checking files against their hashes. The package reads sum files
(hex "sum" files such as `.md5` or `.sha256`, SFV files and base64 variants),
turns hashes between text and bytes, works out which files to hash from a list
of paths, keeps user settings in a JSON file, and can ask for the latest
release or look hashes up on VirusTotal. It needs nothing beyond the standard
library.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
hashtab [--settings PATH] FILE [FILE ...]
```

Give it one or more files or directories; directories are walked, skipping
symbolic links. Give it a single sum file and the files listed in it are
hashed and checked against the hashes it holds; the algorithm whose extension
the sum file has is turned on for that run.

Each line of output is `relative/path  ALGORITHM  HASH`, followed by `OK`
where the hash matches an expected one, or `MISMATCH` on every line of a file
that had expected hashes none of which matched. The command exits with 1 if a
file could not be read or did not match, otherwise 0. With no files it does
nothing and exits with 0.

Available algorithms are CRC32, MD5, SHA-1, SHA-224, SHA-256, SHA-384,
SHA-512, SHA3-256, SHA3-512, BLAKE2b-512 and BLAKE2s-256. By default MD5,
SHA-1, SHA-256 and SHA-512 are on.

`--settings PATH` names a JSON file of stored settings, mapping names to
integers, for example:

```json
{"SHA-256": 1, "CRC32": 1, "MD5": 0, "DisplayUppercase": 0, "LookForSumfiles": 1}
```

Algorithm names switch algorithms on and off. `DisplayUppercase` chooses the
case of printed hashes, `LookForSumfiles` makes it look next to each file for
a sum file named after it (`file.iso.sha256` and so on) for each enabled
algorithm, and `HashSumfileToo` also hashes a sum file given on its own.

## Library use

Hash text and bytes (`hashtab.codec`):

```python
from hashtab.codec import hash_string_to_bytes, hash_bytes_to_string, find_hash_in_string

raw = hash_string_to_bytes("d41d8cd98f00b204e9800998ecf8427e")
text = hash_bytes_to_string(raw, True)                   # upper case hex
found = find_hash_in_string("expected: de ad be ef 01 02")  # b"\xde\xad\xbe\xef\x01\x02"
```

`encode_base64` and `decode_base64` handle base64; decoding is lenient about
padding and URL-safe symbols.

Sum files (`hashtab.sumfile`):

```python
from hashtab.sumfile import parse_sumfile, try_parse_sumfile

entries = parse_sumfile(b"d41d8cd98f00b204e9800998ecf8427e  empty.txt\n", 64)
# [("empty.txt", b"\xd4\x1d...")]
```

The second argument is the byte length of the longest digest in use. A file
holding one bare hash gives one entry with an empty name; data that is not a
sum file gives an empty list. `try_parse_sumfile(path, max_hash_size)` does
the same for a file on disk and raises `OSError` if it cannot be read.

Working out what to hash (`hashtab.paths`):

```python
from hashtab.paths import HashAlgorithmInfo, process_everything
from hashtab.settings import Settings, SettingsStore

algorithms = [HashAlgorithmInfo("SHA-256", ("sha256",), 32)]
settings = Settings(SettingsStore(), [algo.name for algo in algorithms])

result = process_everything(["/data/release.sha256"], settings, algorithms)
for path, info in result.files.items():
    print(info.relative_path, info.expected_hashes)
```

`result.sumfile_type` is -2 when the selection was not a sum file, -1 for a
sum file of unknown algorithm, otherwise the index of the matching algorithm.

Settings (`hashtab.settings`): a `SettingsStore` holds named 32-bit values,
in memory or backed by a JSON file. `Settings(store, algorithm_names)` loads
every option with its default as a `Setting`, whose `set` stores the value and
`set_no_save` changes it for the session only. `color_settings(settings,
color_type)` gives the colours for each `HashColorType`; `rgb` packs a colour.
`hashtab.preferences` has `set_option`, `set_algorithm_enabled`,
`checkbox_availability` and `format_color` for building a preferences screen.

Update checks and VirusTotal lookups are in `hashtab.updates`
(`get_latest_version`, `parse_latest_version`, `Version`) and
`hashtab.virustotal` (`query_virustotal(entries, api_key, fetch)`). Both take a
`fetch` callable that receives an `hashtab.https.HttpRequest` and returns an
`HttpResponse`, so the network part can be swapped out; by default
`hashtab.https.do_https` sends the request. Failures raise `HttpRequestError`
or, for replies that are not the expected JSON, `ValueError`.

```python
from hashtab.virustotal import query_virustotal

results = query_virustotal(entries, api_key="placeholder")
```

## What it does not do

There is no graphical window, no clipboard support and no writing of sum
files: the sum file options among the settings are stored but nothing in the
package produces a sum file. The command line does not run update checks or
VirusTotal lookups; those are library calls only.