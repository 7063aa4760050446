# SPDX-FileCopyrightText: 2025-present DouglasMacKrell <d.mackrell@gmail.com>
#
# SPDX-License-Identifier: MIT

"""MovieWatchlist - personal movie watchlist with catalog enrichment."""

from moviewatchlist.__about__ import __version__

__all__ = ["__version__"]
