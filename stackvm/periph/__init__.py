# Output sinks for standard calls
