"""
Static domain knowledge about DFU/DMIU.

Shown as the overview when a user talks to the assistant without starting an
integration, and sent to the code-generation oracle ahead of every request.
"""

DFU_KNOWLEDGE = """# DFU (Development Feature Unlocking) Overview

## What is DFU/DMIU?

DFU (Development Feature Unlocking Service), also known as DMIU (Development Mode Initialization Unit), enables different debug levels:
- **Debug Level 1** - Basic debugging features
- **Debug Level 2** - Advanced debugging features
- **Safe Level** - Production mode (no debug features)

## Architecture

- **Core (1200-Core)**: Platform-agnostic logic
- **Integration (1800-EcuIntegration)**: Platform-specific implementation

## Initialization

Call `DMIU_Initialize(config_struct)` where config has three attributes:
1. **target_memory**: Pointer to struct with two uint32 (MagicFlagA, MagicFlagB)
2. **dataset_read_func**: Function to load from persistent storage
3. **debug_level_override_func**: Alternative source with OR logic

## Platform-Specific Initialization

- **AUTOSAR**: Call from PreOS.c startup sequence
- **POSIX**: Run dmiu daemon, main() from 1800-EcuIntegration/main.c

## Client API

```c
#include "Debug_Mode.h"
if (Dmiu_IsDebugLevel1Active()) { /* basic debug */ }
if (Dmiu_IsDebugLevel2Active()) { /* advanced debug */ }
// If neither active -> Safe Level (production)
```

## Magic Flag Values

```c
// DEBUG_LEVEL_SAFE: 0x00000000, 0x00000000
// DEBUG_LEVEL_1:    0xDEB00001, 0xDEB00001
// DEBUG_LEVEL_2:    0xDEB00002, 0xDEB00002
```
"""
