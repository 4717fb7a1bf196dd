"""Search queries built from filenames and metadata records returned by providers.

Zero and the empty string are the "absent" values throughout: a year of 0 is
unknown, a season or episode of 0 means the name is not an episode, and an
empty movie title means the name is not a movie.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MovieQuery:
    """Movie search derived from a filename.

    Attributes:
        title: Title to search for ("" when the file is a TV episode).
        year: Release year, 0 when unknown.
    """

    title: str
    year: int = 0

    @property
    def is_movie(self) -> bool:
        return self.title != ""


@dataclass(frozen=True)
class TVQuery:
    """TV episode search derived from a filename.

    Attributes:
        title: Show title.
        year: Year found before the season marker, 0 when unknown.
        season: 1-based season number, 0 when not an episode.
        episode: 1-based episode number, 0 when not an episode.
        episode_title: Episode title hint taken from the text after the
            season/episode marker ("" when absent or only quality tags).
    """

    title: str
    year: int = 0
    season: int = 0
    episode: int = 0
    episode_title: str = ""

    @property
    def is_episode(self) -> bool:
        return self.season > 0 and self.episode > 0

    def format_episode_id(self) -> str:
        """Format the season/episode identifier (e.g., 'S01E05')."""
        return f"S{self.season:02d}E{self.episode:02d}"


@dataclass(frozen=True)
class MovieRecord:
    """Movie metadata returned by a provider."""

    title: str
    year: int = 0
    overview: str = ""
    genres: tuple[str, ...] = ()


@dataclass(frozen=True)
class TVEpisodeRecord:
    """TV show metadata returned by a provider, with episode details when found."""

    title: str
    year: int = 0
    overview: str = ""
    season: int = 0
    episode: int = 0
    episode_title: str = ""
    season_count: int = 0
    network: str = ""
    air_date: str = ""
    status: str = ""
    genres: tuple[str, ...] = ()
