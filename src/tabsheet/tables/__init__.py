"""Table extraction, shaping, and sheet serialization.

Submodules:
  schema      -- TableOptions / RawTable Pydantic models and build_options
  errors      -- ConfigurationError and its ErrorKind
  extraction  -- raw source -> normalised rectangular grid
  transform   -- column modifiers, column order, header/footer trimming
  serialize   -- grid -> tab/line-break delimited text
  presets     -- built-in presets, preset selection, preset files
  sources     -- HTML / JSON source adapters
  polling     -- bounded polling for a source that is not ready yet
  pipeline    -- main run() entry point
"""
