# termprofile

A library for the profile settings of a terminal emulator. A profile covers
colours, font, palette, scrollback, cursor, key bindings and title behaviour.
Profiles are loaded from a settings backend. Changes are written back to it
when you call `save()` or `close()`.

## Installation

    pip install termprofile

Pillow is the only dependency. It is used to load a profile's background image.

## Modules

- `termprofile.colors`
  - `RGBA`: a frozen colour with channels in 0..1.
  - `parse_color`: reads `#rgb` hex (1 to 4 digits per channel), `rgb()` and
    `rgba()`. It raises `ValueError` for anything else.
  - `format_color`: writes `#RRRRGGGGBBBB`.
  - `rgba_equal`: a loose comparison. Two colours are equal when their squared
    channel distance is below 1e-4.
  - Palette helpers: `parse_palette`, `format_palette`, `fill_palette` and
    `palette_equal`. Palette strings are `:`-separated. `parse_palette` turns
    an entry it cannot read into an all-zero colour.
  - `BUILTIN_PALETTES` holds the Tango, Linux, XTerm, RXVT and Solarized
    palettes, at indices 0 to 4. Tango is the default.
- `termprofile.enums`
  - Enums: `TitleMode`, `ScrollbarPosition`, `ExitAction`, `BackgroundType`,
    `EraseBinding`, `CursorBlinkMode` and `CursorShape`.
  - `enum_from_nick` and `enum_to_nick` convert members to and from their
    settings names, such as `"ascii-delete"`.
- `termprofile.font`
  - `FontDescription`: family, weight, style, variant, stretch and size.
  - `FontDescription.from_string` and `to_string` read and write text such as
    `"Monospace Bold 12"`.
- `termprofile.settings`
  - `SettingsBackend`: an in-memory store of values under paths. It has
    per-key write locks (`set_writable`, `is_writable`) and per-path change
    callbacks (`connect`, `disconnect`).
  - `changeset(path)` returns a `Changeset`. It batches writes and applies
    them with `apply()` or when a `with` block ends.
  - Writing a locked key raises `PermissionError`.
- `termprofile.properties`
  - One `PropertySpec` per profile property. Each spec has `default()`,
    `validate()`, `values_equal()`, `decode()` and `encode()`.
  - `validate()` clamps numbers into range and maps unknown enum values to the
    default.
  - `find_spec` looks a spec up by property name. `spec_for_key` looks it up
    by settings key.
- `termprofile.profile`: `Profile`
  - `get`, `set` and `reset` work on properties by name. An unknown name
    raises `KeyError`.
  - `is_locked` reports whether the backend refuses writes to a property.
  - `background_image()` loads the image named by `background-image-file`
    with Pillow. It returns `None` when the image cannot be loaded.
  - Palette methods: `get_palette`, `palette_builtin_index`,
    `set_palette_builtin` and `modify_palette_entry`.
  - Callbacks: `connect_notify` is called when a property is set.
    `connect_forgotten` is called once, on `forget()`.
  - `clone` copies the profile under the first free `profileN` name and saves
    the copy.
  - `close` disconnects from the backend, writes pending changes and forgets
    the profile. It is also called at the end of a `with` block.
- `termprofile.container`: `ScreenContainer`
  - It keeps the scrollbar state of a screen: horizontal and vertical
    `PolicyType`, `CornerType` window placement, and whether the placement
    was chosen explicitly.
  - `scrollbar_visible()` is false when the vertical policy is `NEVER`.
  - `scrollbar_index()` is the scrollbar's position in the row next to the
    screen.
  - `PolicyType.EXTERNAL` is rejected as a vertical policy.
  - Property changes are reported through `connect_notify`.

## Example

```python
from termprofile.settings import SettingsBackend
from termprofile.profile import Profile
from termprofile.colors import parse_color

backend = SettingsBackend()
profile = Profile("default", backend)

print(profile.get("font").to_string())         # Monospace 12
print(profile.get("default-size-columns"))     # 80

profile.set("scrollback-lines", 2000)
profile.set_palette_builtin(4)                 # Solarized
assert profile.palette_builtin_index() == 4

profile.modify_palette_entry(0, parse_color("#102030"))
profile.save()                                 # write pending changes

copy = profile.clone("My copy", existing_names={"default"})
print(copy.get("name"), copy.get("visible-name"))   # profile0 My copy
profile.close()
```

Values that arrive from the backend update the profile without being written
back. Values set through the profile are marked dirty, and `save_pending`
becomes true until `save()` runs.

## What it does not do

- It does not save in the background. Changes stay pending until you call
  `save()` or `close()`.
- `SettingsBackend` keeps everything in memory. Nothing is written to disk or
  to a system settings service.
- `ScreenContainer` only records layout state. It draws no widgets and holds
  no terminal.
- There is no command-line program.

## Running the tests

    pip install -e ".[test]"
    pytest