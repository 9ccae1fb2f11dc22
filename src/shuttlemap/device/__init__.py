# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Device event stages
# stage 0: grab the shuttle's event device and read raw EV_KEY / EV_REL events
# stage 1: SignalInterpreter turns jog and shuttle samples into slot events
# stage 2: Dispatcher looks the slots up for the focused window and sends the strokes
