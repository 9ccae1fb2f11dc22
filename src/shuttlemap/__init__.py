# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
