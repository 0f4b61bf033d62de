"""
Example 01: CSV Mapping

This example binds the rows of a CSV file onto nested dataclasses.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
import tempfile

from row_bind import RowMapper, FileSource, CollectingReporter, binding


@dataclass
class EngineInfo:
    """Engine details"""
    type: str = ""
    displacement: float = 0.0
    horsepower: int = 0


@dataclass
class Manual:
    """Owner's manual"""
    author: str = ""
    pages: int = 0
    last_updated: datetime | None = None


@dataclass
class Car:
    """Car model with nested objects"""
    make: str = ""
    model: str = ""
    year: int = 0
    yearly_mileage: list[float] = field(default_factory=list)
    engine: EngineInfo | None = None
    manual: Manual | None = None


CARS_CSV = """\
Make,Model,Year,Mileage,Engine Type,Displacement (L),Horsepower,Manual Author,Pages,Last Updated
Toyota,Corolla,2018,"12000, 15000.5",I4,1.8,139,A. Writer,320,2023-05-01
Ford,Mustang,twenty,"5000, ???",V8,5.0,450,B. Writer,280,06/30/2022
"""


def main():
    data_dir = Path(tempfile.mkdtemp())
    csv_path = data_dir / "cars.csv"
    csv_path.write_text(CARS_CSV, encoding="utf-8")

    plan = (
        binding(Car)
        .column("Make", "make")
        .column("Model", "model")
        .column("Year", "year")
        .column("Mileage", "yearly_mileage")
        .column("Engine Type", "engine.type")
        .column("Displacement (L)", "engine.displacement")
        .column("Horsepower", "engine.horsepower")
        .column("Manual Author", "manual.author")
        .column("Pages", "manual.pages")
        .column("Last Updated", "manual.last_updated")
        .enforce_non_nullable()
        .build()
    )

    print("=== CSV Mapping ===\n")

    reporter = CollectingReporter()
    cars = RowMapper(FileSource()).map(str(csv_path), plan, reporter=reporter)

    print("1. Mapped cars:")
    for car in cars:
        print(f"   - {car.make} {car.model} ({car.year}): {car.engine}")
        print(f"     mileage={car.yearly_mileage} manual={car.manual}")
    print()

    print("2. Skipped fields:")
    for event in reporter.skipped:
        print(f"   row {event.row_number} '{event.column}': {event.reason.value}")
    print()

    # Clean up
    csv_path.unlink()
    data_dir.rmdir()


if __name__ == "__main__":
    main()
