from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class BioSample:
    url: str = ""
    strain: str = ""
    collection_date: str = ""
    broad_scale_environmental_context: str = ""
    local_scale_environmental_context: str = ""
    environmental_medium: str = ""
    geographic_location: str = ""
    lat_long: str = ""
    host: str = ""
    isolation_and_growth_condition: str = ""
    number_of_replicons: str = ""
    ploidy: str = ""
    propagation: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "url": self.url,
            "strain": self.strain,
            "collectionDate": self.collection_date,
            "broadScaleEnvironmentalContext": self.broad_scale_environmental_context,
            "localScaleEnvironmentalContext": self.local_scale_environmental_context,
            "environmentalMedium": self.environmental_medium,
            "geographicLocation": self.geographic_location,
            "latLong": self.lat_long,
            "host": self.host,
            "isolationAndGrowthCondition": self.isolation_and_growth_condition,
            "numberOfReplicons": self.number_of_replicons,
            "ploidy": self.ploidy,
            "propagation": self.propagation,
        }


@dataclass
class AssemblyReport:
    organism_name: str = ""
    taxonomy_url: str = ""
    infraspecific_name: str = ""
    bio_sample: BioSample = field(default_factory=BioSample)
    submitter: str = ""
    date: str = ""
    ftp_url: str = ""
    gbff_url: str = ""

    def to_dict(self) -> Dict[str, object]:
        return {
            "organismName": self.organism_name,
            "taxonomyUrl": self.taxonomy_url,
            "infraspecificName": self.infraspecific_name,
            "bioSample": self.bio_sample.to_dict(),
            "submitter": self.submitter,
            "date": self.date,
            "ftpUrl": self.ftp_url,
            "gbffUrl": self.gbff_url,
        }


@dataclass
class AssemblyLink:
    url: str
    report: AssemblyReport = field(default_factory=AssemblyReport)

    def to_dict(self) -> Dict[str, object]:
        return {"url": self.url, "report": self.report.to_dict()}


@dataclass
class AssemblySearch:
    url: str = ""
    links: List[AssemblyLink] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"url": self.url, "links": [link.to_dict() for link in self.links]}


@dataclass
class CrawlResult:
    abstract: str = ""
    keywords: List[str] = field(default_factory=list)
    doi: str = ""
    assembly: AssemblySearch = field(default_factory=AssemblySearch)

    def to_dict(self) -> Dict[str, object]:
        return {
            "abstract": self.abstract,
            "keywords": list(self.keywords),
            "doi": self.doi,
            "assembly": self.assembly.to_dict(),
        }


@dataclass
class DownloadRecord:
    url: str
    path: str
    size: int
    elapsed: float
