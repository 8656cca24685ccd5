"""SIG Nusantara - earthquake and weather data for the Indonesia map."""
