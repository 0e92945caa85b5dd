"""Hebrew calendar helpers shared by the luachcal calculators."""
